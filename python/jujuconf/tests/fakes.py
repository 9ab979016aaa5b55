"""
jujuconf/tests/fakes.py

Stand-ins for the Juju CLI. FakeJuju replaces asyncio.create_subprocess_exec
so no real `juju` binary is needed. Each test configures stdout, stderr, exit
code, an optional delay, or a launch error, and can inspect the recorded
command lines afterwards.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


def controller_entry(
    endpoints: Optional[List[str]] = None,
    ca_cert: str = "CERT",
    user: str = "alice",
    password: str = "secret",
) -> Dict[str, Any]:
    """A controller entry shaped like `juju show-controller` output."""
    return {
        "details": {
            "uuid": "5b3a8c2e-0000-4000-8000-000000000001",
            "api-endpoints": (
                endpoints if endpoints is not None else ["https://a:1", "https://b:2"]
            ),
            "cloud": "localhost",
            "region": "localhost",
            "agent-version": "3.4.2",
            "agent-git-commit": "a1b2c3",
            "controller-model-version": "3.4.2",
            "mongo-version": "4.4.24",
            "ca-fingerprint": "AB:CD",
            "ca-cert": ca_cert,
        },
        "current-model": "admin/default",
        "models": {
            "controller": {"uuid": "m-1", "unit-count": 1},
            "default": {"uuid": "m-2", "unit-count": 0},
        },
        "account": {"user": user, "password": password, "access": "superuser"},
    }


@dataclass
class FakeProcess:
    stdout: bytes
    stderr: bytes
    exit_code: int
    delay: float = 0.0
    killed: bool = False
    returncode: Optional[int] = None

    async def communicate(self, input: Optional[bytes] = None) -> Tuple[bytes, bytes]:
        if self.delay:
            await asyncio.sleep(self.delay)
        self.returncode = self.exit_code
        return self.stdout, self.stderr

    def kill(self) -> None:
        self.killed = True
        self.returncode = -9

    async def wait(self) -> Optional[int]:
        return self.returncode


@dataclass
class FakeJuju:
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0
    delay: float = 0.0
    launch_error: Optional[OSError] = None
    calls: List[List[str]] = field(default_factory=list)
    processes: List[FakeProcess] = field(default_factory=list)

    def respond_with(self, payload: Any) -> None:
        """Set stdout to the JSON encoding of `payload`."""
        self.stdout = json.dumps(payload)

    async def create_subprocess_exec(self, *command: str, **kwargs: Any) -> FakeProcess:
        self.calls.append(list(command))
        if self.launch_error is not None:
            raise self.launch_error
        proc = FakeProcess(
            stdout=self.stdout.encode("utf-8"),
            stderr=self.stderr.encode("utf-8"),
            exit_code=self.returncode,
            delay=self.delay,
        )
        self.processes.append(proc)
        return proc
