"""Shared utilities: concurrency helpers."""

from orgfinder.shared.utils.concurrency import gather_fail_fast

__all__ = ["gather_fail_fast"]
