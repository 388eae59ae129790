from rule_agent.reporters.base import Reporter
from rule_agent.reporters.notice import InteractiveNoticeReporter, Notice, NoticeBoard, build_notice
from rule_agent.reporters.stream import StreamReporter

__all__ = [
    "InteractiveNoticeReporter",
    "Notice",
    "NoticeBoard",
    "Reporter",
    "StreamReporter",
    "build_notice",
]
