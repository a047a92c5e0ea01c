"""
Best-effort steps that run after an order is stored.

A failure here must never undo or hide a placed order, so each step is run
through ``run_best_effort`` which turns any exception into an outcome value.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from apps.common.exceptions import SideEffectError

logger = logging.getLogger('storefront.checkout')


@dataclass(frozen=True)
class SideEffectOutcome:
    effect: str
    ok: bool
    value: Any = None
    error: Optional[SideEffectError] = None

    @classmethod
    def succeeded(cls, effect: str, value=None) -> 'SideEffectOutcome':
        return cls(effect=effect, ok=True, value=value)

    @classmethod
    def failed(cls, effect: str, error: SideEffectError) -> 'SideEffectOutcome':
        return cls(effect=effect, ok=False, error=error)

    def as_dict(self):
        return {
            'effect': self.effect,
            'ok': self.ok,
            'error': str(self.error.cause) if self.error else None,
        }


def run_best_effort(effect: str, func: Callable, *args, **kwargs) -> SideEffectOutcome:
    try:
        value = func(*args, **kwargs)
    except Exception as exc:
        error = SideEffectError(effect, exc)
        logger.warning(f"Side effect {error}", exc_info=True)
        return SideEffectOutcome.failed(effect, error)
    return SideEffectOutcome.succeeded(effect, value)
