"""
Child-process entry point for ProcessRunner.

Reads a JSON payload from stdin:

    {"root": "...", "module": "...", "invocation": "...", "args": [...]}

imports `module` as seen from `root`, calls `invocation(*args)` and exits
0 on success or 1 when the call raises or returns False.
"""

import asyncio
import inspect
import json
import os
import sys
import traceback

from ...utils.modules import require_project_module


def run_payload(payload: dict) -> int:
    root = payload["root"]
    module = require_project_module(root, payload["module"])
    invocation = getattr(module, payload["invocation"])

    os.chdir(root)
    outcome = invocation(*payload.get("args", []))
    if inspect.isawaitable(outcome):
        outcome = asyncio.run(_await(outcome))

    if outcome is False:
        return 1
    if isinstance(outcome, int) and not isinstance(outcome, bool):
        return outcome
    return 0


async def _await(awaitable):
    return await awaitable


def main() -> int:
    try:
        payload = json.load(sys.stdin)
    except ValueError as e:
        print(f"relay: invalid runner payload: {e}", file=sys.stderr)
        return 2

    try:
        return run_payload(payload)
    except SystemExit as e:
        if e.code is None:
            return 0
        return e.code if isinstance(e.code, int) else 1
    except Exception:
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
