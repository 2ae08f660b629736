"""
Utilitaires partages pour les commandes CLI de PlexFlix.

Ce module fournit :
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container initialise
- console : instance Rich Console partagee
"""

from contextlib import contextmanager
from functools import wraps

from loguru import logger as loguru_logger
from rich.console import Console

from plexflix.container import Container

console = Console()


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            with Progress(console=console) as progress:
                ...
    """
    loguru_logger.disable("plexflix")
    try:
        yield
    finally:
        loguru_logger.enable("plexflix")


def with_container():
    """
    Decorateur qui injecte un container en premier argument.

    Usage:
        @with_container()
        async def my_command(container, ...):
            config = container.config()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            return await func(container, *args, **kwargs)
        return wrapper
    return decorator
