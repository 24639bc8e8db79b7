"""
mutex-unlock-strip (Go)
Removes a mutex ``Unlock()`` / ``RUnlock()`` call. The lock is still taken but
never released, so the next goroutine calling ``Lock()`` blocks forever.

    mu.Lock()                     mu.Lock()
    defer mu.Unlock()    ->       (line removed)
"""
import re

from hydra.models.injection import InjectionPoint
from hydra.templates.base import LineTemplate


class MutexUnlockStripTemplate(LineTemplate):
    name = "mutex-unlock-strip"
    category = "concurrency"
    language = "go"
    description = "Removes a mutex Unlock/RUnlock call, leaving the lock held and deadlocking later callers"
    pattern = re.compile(r"^\s*(?:defer\s+)?(?P<call>[\w.]+\.R?Unlock\s*\(\s*\))\s*(?://.*)?$")
    removes_line = True

    def describe(self, point: InjectionPoint) -> str:
        call = self.match_fields(point).get("call") or "Unlock()"
        return f"Removed '{call}' at line {point.line}; the mutex is never released and the next Lock() deadlocks"
