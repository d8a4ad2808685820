"""Run bgpq4 for one member and turn its JSON output into AS numbers.

bgpq4 -j -t -h <host> -l <label> [-S <sources>] [-L <depth>] <AS-SET>
prints {"<label>": [64500, 64501, ...]}.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import re
from typing import Any

from irr_asset_tooling.flatten.errors import ExpansionFailure, MalformedOutput
from irr_asset_tooling.flatten.specs import MemberSpec

log = logging.getLogger(__name__)

DEFAULT_BGPQ4_HOST = "whois.radb.net"
DEFAULT_BGPQ4_PATH = "bgpq4"
DEFAULT_TIMEOUT = 20.0
MAX_LIST_NAME = 64


def sanitize_list_name(name: str) -> str:
    """bgpq4 -l label: [A-Za-z0-9_] only, at most 64 characters."""
    return re.sub(r"[^A-Za-z0-9_]", "_", name)[:MAX_LIST_NAME]


def build_bgpq4_args(
    spec: MemberSpec,
    sources: str | None = None,
    host: str = DEFAULT_BGPQ4_HOST,
) -> list[str]:
    """Arguments for bgpq4 (without the executable). The member name is always last."""
    args = ["-j", "-t", "-h", host, "-l", sanitize_list_name(spec.name)]
    if sources and sources.strip():
        args += ["-S", sources.strip()]
    if spec.depth is not None and spec.depth >= 0:
        args += ["-L", str(spec.depth)]
    args.append(spec.name)
    return args


def _bucket(obj: dict[str, Any], list_name: str) -> list[Any]:
    value = obj.get(list_name)
    if isinstance(value, list):
        return value
    # label may come back altered (truncation quirks); take whatever bgpq4 named it
    first = next(iter(obj), None)
    if first is not None and isinstance(obj[first], list):
        return obj[first]
    return []


def parse_bgpq4_output(stdout: str, list_name: str, member: str = "") -> list[str]:
    """Extract AS<n> strings from bgpq4 JSON. An empty list is a valid result."""
    try:
        parsed = json.loads(stdout)
    except json.JSONDecodeError as e:
        msg = f"non-JSON output: {stdout[:200]!r}"
        raise MalformedOutput(member or list_name, msg) from e
    if not isinstance(parsed, dict):
        raise MalformedOutput(member or list_name, "JSON output is not an object")

    out: list[str] = []
    for value in _bucket(parsed, list_name):
        if isinstance(value, bool) or not isinstance(value, int):
            continue
        text = str(value).strip()
        if text:
            out.append(f"AS{text}")
    return out


def _kill(proc: asyncio.subprocess.Process) -> None:
    if proc.returncode is None:
        # bgpq4 may exit between the check and the signal
        with contextlib.suppress(ProcessLookupError):
            proc.kill()


async def query_expanded_asns(
    spec: MemberSpec,
    timeout: float = DEFAULT_TIMEOUT,
    sources: str | None = None,
    *,
    host: str = DEFAULT_BGPQ4_HOST,
    executable: str = DEFAULT_BGPQ4_PATH,
) -> list[str]:
    """Expand one member with bgpq4. Raises ExpansionFailure / MalformedOutput.

    On timeout bgpq4 is killed and whatever it wrote to stderr so far goes
    into the failure detail. A cancelled caller also kills the process.
    """
    args = build_bgpq4_args(spec, sources, host)
    log.debug("Running %s %s", executable, " ".join(args))
    try:
        proc = await asyncio.create_subprocess_exec(
            executable,
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise ExpansionFailure(spec.name, f"could not start {executable}: {e}") from e

    # communicate() is not cancelled on timeout: killing bgpq4 closes its pipes,
    # so the same task then returns the output written so far.
    communicate = asyncio.ensure_future(proc.communicate())
    try:
        done, _ = await asyncio.wait({communicate}, timeout=timeout)
    except BaseException:
        _kill(proc)
        communicate.cancel()
        raise

    if not done:
        _kill(proc)
        _, stderr = await communicate
        detail = stderr.decode(errors="replace").strip()
        msg = f"timed out after {timeout:g}s"
        raise ExpansionFailure(spec.name, f"{msg}: {detail}" if detail else msg)

    stdout, stderr = communicate.result()

    if proc.returncode != 0:
        detail = stderr.decode(errors="replace").strip() or "no diagnostic output"
        raise ExpansionFailure(spec.name, f"exit {proc.returncode}: {detail}")

    return parse_bgpq4_output(
        stdout.decode(errors="replace"), sanitize_list_name(spec.name), spec.name
    )
