"""Self-test suite exercising the engine's helpers through real test bodies.

Run with ``case-runner selftest`` or ``python -m case_runner.suites.selftest``.
"""

import os
import stat
import sys
from enum import IntEnum

from case_runner.assertions import (
    check,
    check_any_error,
    check_error,
    check_strings_equal,
)
from case_runner.cli import run_main
from case_runner.errors import ErrorCode, TestError, failure, skipped
from case_runner.models.descriptor import Mode, case, opts_case
from case_runner.models.options import RunOptions, data_path, get_srcdir
from case_runner.resolver import declared_mode, pass_if_fs_type_is
from case_runner.scratch import Scratch
from case_runner.suites.manifest import SuiteManifest

class RepoError(IntEnum):
    """Codes the bodies below use for their expected errors."""

    ENTRY_NOT_FOUND = 160_013


def _lookup(entries: dict[str, str], key: str) -> str:
    if key not in entries:
        raise TestError(RepoError.ENTRY_NOT_FOUND, f"Entry '{key}' not found")
    return entries[key]


def _lookup_err(entries: dict[str, str], key: str) -> TestError | None:
    try:
        _lookup(entries, key)
    except TestError as e:
        return e
    return None


def error_chain_walk(scratch: Scratch) -> TestError | None:
    root = TestError(RepoError.ENTRY_NOT_FOUND, "root")
    outer = failure("outer", failure("middle", root))

    if err := check(outer.root_cause() is root, "outer.root_cause() is root"):
        return err
    if err := check(outer.has_code(RepoError.ENTRY_NOT_FOUND), "root code in chain"):
        return err
    return check(len(outer.format_chain()) == 3, "len(outer.format_chain()) == 3")


def expected_error_code(scratch: Scratch) -> TestError | None:
    entries = {"iota": "This is the file 'iota'.\n"}

    if err := check_error(_lookup_err(entries, "mu"), RepoError.ENTRY_NOT_FOUND):
        return err
    return check_strings_equal(_lookup(entries, "iota"), "This is the file 'iota'.\n")


def mismatched_error_code(scratch: Scratch) -> TestError | None:
    err = check_error(TestError(1, "other"), RepoError.ENTRY_NOT_FOUND)
    if err is None:
        return failure("check_error accepted the wrong error code")

    if err2 := check("ENTRY_NOT_FOUND" in err.message, "expected code named"):
        return err2
    return check(err.cause is not None, "received error chained as cause")


def any_error(scratch: Scratch) -> TestError | None:
    if err := check_any_error(_lookup_err({}, "A")):
        return err
    if check_any_error(None) is None:
        return failure("check_any_error accepted NO_ERROR")
    if check_any_error(TestError(ErrorCode.ASSERTION_FAIL, "bug")) is None:
        return failure("check_any_error accepted ASSERTION_FAIL")
    return None


def scratch_scope(options: RunOptions, scratch: Scratch) -> TestError | None:
    workdir = scratch.mkdtemp()
    (workdir / "iota").write_text("This is the file 'iota'.\n")

    repo = data_path(options, f"{scratch.name}-repo")
    repo.mkdir(parents=True, exist_ok=True)
    scratch.add_cleanup(repo)

    if err := check((workdir / "iota").is_file(), "(workdir / 'iota').is_file()"):
        return err
    return check(repo.is_dir(), "repo.is_dir()")


def srcdir_fallback(options: RunOptions, scratch: Scratch) -> TestError | None:
    return check(get_srcdir(options).is_dir(), "get_srcdir(options).is_dir()")


def backend_required(options: RunOptions, scratch: Scratch) -> TestError | None:
    if options.fs_type is None:
        return skipped("no --fs-type given")
    return check(bool(options.fs_type.strip()), "fs-type is not blank")


def memory_backend_only(options: RunOptions, scratch: Scratch) -> TestError | None:
    if options.fs_type != "memory":
        return failure(f"backend '{options.fs_type}' does not support this yet")
    return None


def posix_mode_bits(scratch: Scratch) -> TestError | None:
    path = scratch.mkdtemp() / "readonly"
    path.write_text("")
    os.chmod(path, stat.S_IRUSR)
    return check(not os.access(path, os.W_OK) or os.geteuid() == 0, "file is read-only")


def unicode_normalization(scratch: Scratch) -> TestError | None:
    return check_strings_equal("\u00e9", "e\u0301")


suite = SuiteManifest(
    max_threads=4,
    tests=[
        case(error_chain_walk, "walk a chained error to its root cause"),
        case(expected_error_code, "expect a specific error code"),
        case(mismatched_error_code, "report both codes on mismatch"),
        case(any_error, "expect any error but an internal assertion"),
        opts_case(scratch_scope, "release scratch resources and register cleanup"),
        opts_case(srcdir_fallback, "fall back to the current source directory"),
        opts_case(backend_required, "skip at runtime without a backend"),
        opts_case(
            memory_backend_only,
            "feature only the memory backend supports",
            mode=Mode.XFAIL,
            predicate=pass_if_fs_type_is("memory"),
        ),
        case(
            posix_mode_bits,
            "read-only file permissions",
            mode=declared_mode(sys.platform == "win32", Mode.SKIP),
        ),
        case(
            unicode_normalization,
            "compare differently normalized strings",
            mode=Mode.XFAIL,
            wip="strings are not normalized before comparison",
        ),
    ],
)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(run_main(suite))
