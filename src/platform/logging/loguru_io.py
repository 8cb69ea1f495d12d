from collections.abc import Awaitable, Generator
from functools import wraps
from inspect import iscoroutinefunction, isgeneratorfunction
import types
from typing import TYPE_CHECKING, Any, Callable, Optional, ParamSpec, TypeVar, cast, overload


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.generator_wrapper import GeneratorWrapper
from src.platform.logging.loguru_io_config import (
    ExtraField,
    GeneratorMethod,
    call_depth_var,
    custom_logger,
)
from src.platform.logging.loguru_io_utils import (
    build_call_target_func_path,
    fetch_layer_depth,
    get_chain_start_time,
    handle_yield,
    mask_sensitive,
    normalize_args_kwargs,
    reset_call_depth,
    should_mask_keyword,
    truncate_content,
)

_F = TypeVar('_F', bound=Callable[..., Any])


class LoguruIO:
    """
    Decorator logging what goes in and out of a function.

    Arguments and return values are logged at DEBUG with sensitive values
    masked; the first decorated frame an exception passes through logs it once.
    Nested decorated calls are indented by call depth so a request reads as a
    tree from controller to repo.
    """

    # Frames between the decorated function's caller and the loguru call
    _CALLER_DEPTH = 2

    def __init__(
        self, bound_logger: 'LoguruLogger', *, reraise: bool = True, truncate: bool = False
    ) -> None:
        self._bound_logger = bound_logger
        self.reraise = reraise
        self.truncate = truncate
        self.extra: dict[str, Any] = {}

    def _debug(self, message: str) -> None:
        self._bound_logger.bind(**self.extra).opt(depth=self._CALLER_DEPTH + 1).debug(
            f'{fetch_layer_depth()}{message}'
        )

    def log_call(
        self, *args: Any, yield_method: Optional[GeneratorMethod] = None, **kwargs: Any
    ) -> None:
        call_depth_var.set(call_depth_var.get() + 1)
        self.extra[ExtraField.CHAIN_START_TIME] = get_chain_start_time()
        # Masking walks every argument, skip it when DEBUG lines are dropped anyway
        if settings.DEBUG:
            self._debug(
                f'{handle_yield(yield_method)}'
                f'args: {self.mask_sensitive(args)}, kwargs: {self.mask_sensitive(kwargs)}'
            )

    def log_result(self, result: Any, yield_method: Optional[GeneratorMethod] = None) -> None:
        if settings.DEBUG:
            self._debug(f'{handle_yield(yield_method)}return: {self.mask_sensitive(result)}')

    def log_error(self, exc: Exception) -> None:
        if getattr(exc, '_has_logged', False):
            return
        exc._has_logged = True  # type: ignore[attr-defined]

        bound = self._bound_logger.bind(**self.extra).opt(depth=self._CALLER_DEPTH + 1)
        # Expected domain errors get one line, anything else gets a traceback
        if isinstance(exc, CustomBaseError):
            bound.error(f'{type(exc).__name__}: {exc}')
        else:
            bound.exception(f'{type(exc).__name__}: {exc}')

    def mask_sensitive(self, data: Any) -> Any:
        if isinstance(data, dict):
            masked: Any = {
                key: self.mask_sensitive(should_mask_keyword(key, value))
                for key, value in data.items()
            }
        elif isinstance(data, list | tuple):
            masked = type(data)(self.mask_sensitive(item) for item in data)
        else:
            masked = mask_sensitive(data)

        return truncate_content(masked) if self.truncate else masked

    def _hide_from_traceback(self, wrapper: Callable[..., Any]) -> _F:
        # loguru skips its own file when rendering tracebacks
        wrapper.__code__ = wrapper.__code__.replace(  # type: ignore[attr-defined]
            co_filename=cast(types.FunctionType, self._bound_logger.catch).__code__.co_filename
        )
        return cast(_F, wrapper)

    def __call__(self, func: _F) -> _F:
        self.extra[ExtraField.CALL_TARGET] = build_call_target_func_path(func)

        if iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                try:
                    self.log_call(*args, **kwargs)
                    args, kwargs = normalize_args_kwargs(func, *args, **kwargs)
                    result = await cast(Awaitable[Any], func(*args, **kwargs))
                    self.log_result(result)
                    return result
                except Exception as e:
                    self.log_error(e)
                    if self.reraise:
                        raise
                    return None
                finally:
                    reset_call_depth()

            return self._hide_from_traceback(async_wrapper)

        if isgeneratorfunction(func):

            @wraps(func)
            def generator_wrapper(*args: Any, **kwargs: Any) -> GeneratorWrapper | None:
                try:
                    self.log_call(*args, **kwargs)
                    generator = cast(Generator[Any, Any, Any], func(*args, **kwargs))
                    self.log_result(generator)
                    return GeneratorWrapper(generator, self)
                except Exception as e:
                    self.log_error(e)
                    if self.reraise:
                        raise
                    return None
                finally:
                    reset_call_depth()

            return self._hide_from_traceback(generator_wrapper)

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                self.log_call(*args, **kwargs)
                args, kwargs = normalize_args_kwargs(func, *args, **kwargs)
                result = func(*args, **kwargs)
                self.log_result(result)
                return result
            except Exception as e:
                self.log_error(e)
                if self.reraise:
                    raise
                return None
            finally:
                reset_call_depth()

        return self._hide_from_traceback(sync_wrapper)


_P = ParamSpec('_P')
_T = TypeVar('_T')


class Logger:
    base = custom_logger

    @overload
    @staticmethod
    def io(func: Callable[_P, _T]) -> Callable[_P, _T]: ...

    @overload
    @staticmethod
    def io(func: None = ..., *, reraise: bool = ..., truncate: bool = ...) -> LoguruIO: ...

    @staticmethod
    def io(
        func: Callable[_P, _T] | None = None, *, reraise: bool = True, truncate: bool = True
    ) -> Callable[_P, _T] | LoguruIO:
        decorator = LoguruIO(custom_logger, reraise=reraise, truncate=truncate)
        return decorator(func) if func else decorator
