"""
Asynchronous entry points for host applications.

Each call builds a fresh RsaEngine, runs the work off the event loop in an
executor and resolves to the result. Failures surface as the RSAError raised
by the engine; its ``code`` and ``message`` are what a host reports back.
"""
import asyncio
import logging
from concurrent.futures import Executor
from typing import Callable, Dict, Optional, TypeVar

from .engine import RsaEngine
from .errors import RSAError

log = logging.getLogger(__name__)

T = TypeVar('T')


async def _run(operation: str, func: Callable[[], T], executor: Optional[Executor]) -> T:
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(executor, func)
    except RSAError as e:
        log.info("%s rejected: %s", operation, e.to_dict())
        raise


async def generate(key_size: Optional[int] = None, *, executor: Optional[Executor] = None) -> Dict[str, str]:
    """Resolve to ``{'public': ..., 'private': ...}``."""
    def work() -> Dict[str, str]:
        pair = RsaEngine(key_size).generate()
        return {'public': pair.public, 'private': pair.private}

    return await _run('generate', work, executor)


async def encrypt(message: str, public_key: str, *, executor: Optional[Executor] = None) -> str:
    def work() -> str:
        engine = RsaEngine()
        engine.load_public_key(public_key)
        return engine.encrypt(message)

    return await _run('encrypt', work, executor)


async def decrypt(ciphertext: str, private_key: str, *, executor: Optional[Executor] = None) -> str:
    def work() -> str:
        engine = RsaEngine()
        engine.load_private_key(private_key)
        return engine.decrypt(ciphertext)

    return await _run('decrypt', work, executor)
