"""Resolution of a test's effective run mode."""

from case_runner.models.descriptor import Mode, Predicate, TestDescriptor
from case_runner.models.options import RunOptions


def declared_mode(condition: bool, mode: Mode) -> Mode:
    """Return ``mode`` when ``condition`` holds, ``Mode.PASS`` otherwise.

    Used when building a suite's descriptor list, e.g.
    ``declared_mode(sys.platform == "win32", Mode.XFAIL)``.
    """
    return mode if condition else Mode.PASS


def predicate_matches(descriptor: TestDescriptor, options: RunOptions) -> bool:
    """Evaluate the descriptor's runtime predicate, if it has one."""
    predicate = descriptor.predicate
    if predicate is None:
        return False
    return bool(predicate.func(options, predicate.value))


def effective_mode(descriptor: TestDescriptor, matched: bool) -> Mode:
    """Return the mode for an already evaluated predicate result."""
    if matched and descriptor.predicate is not None:
        return descriptor.predicate.alternate_mode
    return descriptor.mode


def resolve_mode(descriptor: TestDescriptor, options: RunOptions) -> Mode:
    """Return the mode a test actually runs in for these options."""
    return effective_mode(descriptor, predicate_matches(descriptor, options))


def fs_type_is(options: RunOptions, value: str) -> bool:
    """Return True if the configured storage backend is ``value``."""
    return options.fs_type == value


def fs_type_not(options: RunOptions, value: str) -> bool:
    """Return True if the configured storage backend is not ``value``."""
    return options.fs_type != value


def pass_if_fs_type_is(fs_type: str) -> Predicate:
    return Predicate(
        func=fs_type_is,
        value=fs_type,
        alternate_mode=Mode.PASS,
        description=f"PASS if fs-type = {fs_type}",
    )


def pass_if_fs_type_is_not(fs_type: str) -> Predicate:
    return Predicate(
        func=fs_type_not,
        value=fs_type,
        alternate_mode=Mode.PASS,
        description=f"PASS if fs-type != {fs_type}",
    )
