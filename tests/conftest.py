"""
Pytest configuration: puts ``src`` on sys.path and provides shared sample files.
"""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from rule_agent.core.models import FileDescriptor, FileKind, HttpMethod, RouteDescriptor, RouteKind  # noqa: E402
from rule_agent.fixtures import FixtureSet  # noqa: E402

GOOD_COMPONENT = """'use client';

import { useState } from 'react';
import useSWR from 'swr';
import { motion } from 'framer-motion';
import { Button } from '@/components/ui/button';
import { Card } from '@/components/ui/card';
import { Skeleton } from '@/components/ui/skeleton';
import { EmptyState } from '@/components/empty-state';

interface ReportListProps {
  companyId: string;
}

export function ReportList({ companyId }: ReportListProps) {
  const [selected, setSelected] = useState<string | null>(null);
  const { data, isLoading } = useSWR(`/api/reports?company_id=${companyId}`);

  if (isLoading) return <Skeleton className="h-24 rounded-2xl" />;
  if (!data?.length) return <EmptyState title="No reports yet" />;

  return (
    <motion.div className="grid gap-4 md:grid-cols-2 dark:bg-background">
      {data.map((report: Report) => (
        <Card key={report.id} className="p-4 rounded-2xl">
          <Button aria-label={report.title} className="rounded-full transition" onClick={() => setSelected(report.id)}>
            {report.title}
          </Button>
        </Card>
      ))}
    </motion.div>
  );
}
"""

GOOD_API_ROUTE = """import { NextResponse } from 'next/server';
import { z } from 'zod';
import { validateApiAccess } from '@/lib/auth';
import { rateLimit } from '@/lib/rate-limit';
import { logSecure } from '@/lib/logger';
import { createClient } from '@/lib/supabase/server';

const querySchema = z.object({ company_id: z.string().uuid() });

export async function GET(request: Request) {
  try {
    await rateLimit(request);
    const user = await validateApiAccess(request);
    const { company_id } = querySchema.parse(Object.fromEntries(new URL(request.url).searchParams));
    const supabase = createClient();
    const { data } = await supabase.from('reports').select('*').eq('company_id', company_id);
    logSecure('reports.list', { userId: user.id });
    return NextResponse.json({ data });
  } catch (err) {
    logSecure('reports.list_failed', { reason: String(err) });
    return NextResponse.json({ error: 'Failed to load reports' }, { status: 500 });
  }
}
"""

BAD_COMPONENT = """export function Banner() {
  return <div style={{ color: '#ff0000' }}>Sale</div>;
}
"""


@pytest.fixture(scope="session")
def fixture_set() -> FixtureSet:
    return FixtureSet.load()


@pytest.fixture
def good_component() -> FileDescriptor:
    return FileDescriptor(path="src/components/reports/ReportList.tsx", kind=FileKind.COMPONENT, content=GOOD_COMPONENT)


@pytest.fixture
def good_api_file() -> FileDescriptor:
    return FileDescriptor(path="src/app/api/reports/route.ts", kind=FileKind.API, content=GOOD_API_ROUTE)


@pytest.fixture
def bad_component() -> FileDescriptor:
    return FileDescriptor(path="src/components/Banner.tsx", kind=FileKind.COMPONENT, content=BAD_COMPONENT)


@pytest.fixture
def secure_route() -> RouteDescriptor:
    return RouteDescriptor(
        path="/api/reports",
        method=HttpMethod.GET,
        kind=RouteKind.API,
        auth=True,
        rls=True,
        validation=True,
        rate_limit=True,
    )


@pytest.fixture
def simulated_files() -> tuple[FileDescriptor, ...]:
    """CI-simulated entries: paths and kinds only, no content."""
    return (
        FileDescriptor(path="src/components/reports/Chart.tsx", kind=FileKind.COMPONENT),
        FileDescriptor(path="src/app/reports/page.tsx", kind=FileKind.PAGE),
        FileDescriptor(path="src/app/api/orders/route.ts", kind=FileKind.API),
        FileDescriptor(path="src/app/globals.css", kind=FileKind.STYLE),
    )
