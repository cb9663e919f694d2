#!/usr/bin/env python3
"""Validate local RoomSense environment readiness."""

from __future__ import annotations

import importlib
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from roomsense.controllers.session_controller import SubmitSignalCommand
from roomsense.domain.models import Preferences, Room, Wing
from roomsense.main import create_session
from roomsense.services.matching_service import compute_match

SEPARATOR_LINE = "=" * 44


def _print_result(name: str, success: bool, detail: str = "") -> tuple[bool, str]:
    if success:
        return True, f"[PASS] {name}{detail}"
    return False, f"[FAIL] {name}: {detail}"


def main() -> int:
    results: list[str] = []
    all_passed = True

    # CHECK 1: Python version >= 3.11
    if sys.version_info >= (3, 11):
        ok, line = _print_result("Python " + sys.version.split()[0], True)
    else:
        ok, line = _print_result(
            "Python version >= 3.11",
            False,
            f"found {sys.version.split()[0]}",
        )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 2: Required packages importable
    package_specs = [
        ("pydantic", "pydantic"),
        ("pytest", "pytest"),
    ]
    import_errors: list[str] = []
    for module_name, dist_name in package_specs:
        try:
            importlib.import_module(module_name)
            version(dist_name)
        except (ImportError, PackageNotFoundError) as exc:
            import_errors.append(f"{module_name} ({exc})")
    if import_errors:
        ok, line = _print_result(
            "Required packages",
            False,
            "missing/unimportable -> " + "; ".join(import_errors),
        )
    else:
        ok, line = _print_result("Required packages: all importable", True)
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 3: Reference match score
    try:
        room = Room("room-check", "000", Wing.LEFT, 0, quiet=8, view=7, access=5, base_delta=6)
        match = compute_match(room, Preferences(65, True, 6))
        if (match.score, match.suggested_delta) != (80, 6):
            raise RuntimeError(f"expected score=80 delta=6, got {match}")
        ok, line = _print_result("Match engine", True, f": score={match.score} delta={match.suggested_delta}")
    except RuntimeError as exc:
        ok, line = _print_result("Match engine", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 4: Session wiring, catalog seed and signal round
    try:
        controller = create_session()
        ranked = controller.recommendations()
        if not ranked.recommendations:
            raise RuntimeError("no recommendations for the default floor")
        room_id = ranked.recommendations[0].room.room_id
        before = ranked.recommendations[0].room.reports
        updated = controller.submit_signal(SubmitSignalCommand(room_id=room_id))
        if updated.reports != before + 1:
            raise RuntimeError("signal did not increment reports")
        ok, line = _print_result("Session workflow", True, f": top room {updated.number}")
    except RuntimeError as exc:
        ok, line = _print_result("Session workflow", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    print(SEPARATOR_LINE)
    print(" RoomSense Environment Validation")
    print(SEPARATOR_LINE)
    for line in results:
        print(f" {line}")
    print(SEPARATOR_LINE)
    if all_passed:
        print(" All checks passed. Environment is ready.")
        print(SEPARATOR_LINE)
        return 0
    print(" One or more checks failed.")
    print(SEPARATOR_LINE)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
