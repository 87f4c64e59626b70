"""The generation interface shared by providers and the router."""

from typing import AsyncIterator, Protocol, runtime_checkable

from model_router.models.options import CallOptions
from model_router.models.results import GenerateResult, StreamPart


@runtime_checkable
class LanguageModel(Protocol):
    """Anything that can generate once or as a stream from CallOptions.

    ``stream`` is a coroutine that resolves to the stream handle, so a failure
    to open the stream surfaces when it is awaited.
    """

    provider: str
    model_id: str

    async def generate(self, options: CallOptions) -> GenerateResult: ...

    async def stream(self, options: CallOptions) -> AsyncIterator[StreamPart]: ...
