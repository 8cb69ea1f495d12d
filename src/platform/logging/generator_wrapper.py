from types import TracebackType
from typing import TYPE_CHECKING, Any, Callable, Generator, Self

from src.platform.logging.loguru_io_config import GeneratorMethod
from src.platform.logging.loguru_io_utils import reset_call_depth


if TYPE_CHECKING:
    from src.platform.logging.loguru_io import LoguruIO


class GeneratorWrapper:
    """Generator proxy logging each step of a `Logger.io` decorated generator."""

    def __init__(self, generator: Generator[Any, Any, Any], io: 'LoguruIO') -> None:
        self.generator = generator
        self._io = io

    def __iter__(self) -> Self:
        return self

    def _step(self, method: GeneratorMethod, advance: Callable[[], Any], *args: Any) -> Any:
        try:
            self._io.log_call(*args, yield_method=method)
            value = advance()
            self._io.log_result(value, yield_method=method)
            return value
        except StopIteration as stop:
            self._io.log_result(stop.value, yield_method=method)
            raise
        finally:
            reset_call_depth()

    def __next__(self) -> Any:
        return self._step(GeneratorMethod.NEXT, lambda: next(self.generator))

    def send(self, value: Any) -> Any:
        return self._step(GeneratorMethod.SEND, lambda: self.generator.send(value), value)

    def throw(
        self,
        exc_type: type[BaseException],
        exc_val: BaseException | None = None,
        tb: TracebackType | None = None,
    ) -> Any:
        error = exc_val.with_traceback(tb) if exc_val is not None else exc_type
        return self._step(GeneratorMethod.THROW, lambda: self.generator.throw(error), exc_type)

    def close(self) -> None:
        self.generator.close()
