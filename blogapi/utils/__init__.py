from blogapi.utils.helpers import get_summary, host, today_str, user_agent, utc_now

__all__ = [
    "get_summary",
    "host",
    "today_str",
    "user_agent",
    "utc_now",
]
