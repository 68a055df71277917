"""Translation of domain errors into CLI exits.

Unknown ids exit with status 3, every other domain error with status 1
(click's generic failure), so scripts can tell "missing" from "refused".
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import click

from stockflow.domain.exceptions import DomainException, EntityNotFoundError

NOT_FOUND_EXIT_CODE = 3


class NotFoundException(click.ClickException):
    exit_code = NOT_FOUND_EXIT_CODE


@contextmanager
def domain_errors() -> Iterator[None]:
    try:
        yield
    except EntityNotFoundError as exc:
        raise NotFoundException(str(exc)) from exc
    except DomainException as exc:
        raise click.ClickException(str(exc)) from exc
