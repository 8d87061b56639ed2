"""Remote agent platform collaborators.

Public API:
- AgentClient / SchedulerClient: Protocols the core depends on
- AgentApiClient: httpx implementation of both
"""

from newsdesk.client.http import AgentApiClient, ApiError
from newsdesk.client.protocols import (
    AgentClient,
    ExecutionLogResult,
    InvocationResult,
    MutationResult,
    ScheduleListResult,
    SchedulerClient,
)

__all__ = [
    "AgentApiClient",
    "AgentClient",
    "ApiError",
    "ExecutionLogResult",
    "InvocationResult",
    "MutationResult",
    "ScheduleListResult",
    "SchedulerClient",
]
