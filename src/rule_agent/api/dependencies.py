from rule_agent.core.config import settings
from rule_agent.engine import RuleAgent
from rule_agent.reporters import InteractiveNoticeReporter, NoticeBoard, StreamReporter

# Process-wide board so notices posted by one request are visible to the next.
notice_board = NoticeBoard()


def get_notice_board() -> NoticeBoard:
    return notice_board


def build_agent(preset: str | None = None) -> RuleAgent:
    """Fresh agent per request, configured from the environment and an optional preset."""
    agent = RuleAgent(
        settings.agent_config(),
        reporters={"console": StreamReporter(), "ui": InteractiveNoticeReporter(notice_board)},
    )
    if preset:
        agent.apply_preset(preset)
    return agent


def get_agent_factory():
    return build_agent
