import pytest

from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.logging.loguru_io_config import call_depth_var
from src.platform.logging.loguru_io_utils import mask_sensitive, truncate_content


@Logger.io
def add(a: int, b: int) -> int:
    return a + b


@Logger.io
async def find(item_id: int) -> int:
    if item_id < 0:
        raise NotFoundError(f'Item not found with id of {item_id}')
    return item_id


@Logger.io
def countdown(n: int):
    while n > 0:
        yield n
        n -= 1


@pytest.mark.unit
class TestLoggerIO:
    def test_sync_function_returns_value(self) -> None:
        assert add(2, 3) == 5
        assert call_depth_var.get() == 0

    @pytest.mark.asyncio
    async def test_async_function_returns_value(self) -> None:
        assert await find(4) == 4

    @pytest.mark.asyncio
    async def test_exception_propagates_and_is_marked_logged(self) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            await find(-1)

        assert getattr(exc_info.value, '_has_logged', False) is True
        assert call_depth_var.get() == 0

    def test_generator_is_wrapped_and_iterable(self) -> None:
        assert list(countdown(3)) == [3, 2, 1]

    def test_mask_sensitive_hides_password_pairs(self) -> None:
        masked = mask_sensitive("UserEntity(email='a@b.c', password='hunter22')")

        assert 'hunter22' not in masked
        assert "email='a@b.c'" in masked

    def test_truncate_long_content(self) -> None:
        truncated = truncate_content('x' * 50, max_length=10)

        assert truncated.startswith('x' * 10)
        assert 'truncated 40 chars' in truncated
