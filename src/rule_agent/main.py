from fastapi import FastAPI

from rule_agent.api.governance import router as governance_router
from rule_agent.core.config import configure_logging, settings

# --- Application Setup ---

configure_logging(settings.logging)

app = FastAPI(
    title="Rule Agent",
    description="Governance policy checks for proposed code changes.",
    version="1.0.0",
)

# --- Include Routers ---

app.include_router(governance_router, prefix="/api/v1", tags=["Governance API"])

# --- Root Endpoint ---


@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the service is running."""
    return {"status": "ok", "message": "Rule Agent is running."}
