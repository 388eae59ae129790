from rule_agent.presentation.report_formatter import format_stream_report, parse_summary, render_notice_html

__all__ = ["format_stream_report", "parse_summary", "render_notice_html"]
