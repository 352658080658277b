from .rate_limit_store import InMemoryRateLimitStore
from .structured_logger import StructuredLogger
from .system_clock import SystemClock
from .uuid_id_generator import UuidIdGenerator

__all__ = ["InMemoryRateLimitStore", "StructuredLogger", "SystemClock", "UuidIdGenerator"]
