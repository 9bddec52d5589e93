import functools
import traceback
from collections.abc import Callable, Iterable
from multiprocessing.dummy import Pool as ThreadPool
from typing import Any


def full_traceback(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except Exception as e:
            msg = f"{e}\n\nOriginal {traceback.format_exc()}"
            raise type(e)(msg) from e

    return wrapper


def catching_traceback(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except Exception as e:
            return e

    return wrapper


def run(
    func: Callable,
    iterable: Iterable[Any],
    thread_pool_size: int,
    return_exceptions: bool = False,
    **kwargs: Any,
) -> list[Any]:
    """run executes a function for each item in the input iterable.
    execution will be multithreaded according to the input
    thread_pool_size. kwargs are passed to the input function
    (optional). results are returned in the order of the input
    iterable. If return_exceptions is true, any exceptions that may
    have happened in each thread are returned in the return value,
    so every item is processed even if some of them fail.
    """

    if return_exceptions:
        tracer = catching_traceback
    else:
        tracer = full_traceback

    func_partial = functools.partial(tracer(func), **kwargs)

    pool = ThreadPool(max(thread_pool_size, 1))
    try:
        return pool.map(func_partial, iterable)
    finally:
        pool.close()
        pool.join()
