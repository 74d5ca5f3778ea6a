from .cron import ScheduledTasksResponse

__all__ = ["ScheduledTasksResponse"]
