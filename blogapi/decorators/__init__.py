from blogapi.decorators.metrics import timed
from blogapi.decorators.with_retry import with_retry

__all__ = ["timed", "with_retry"]
