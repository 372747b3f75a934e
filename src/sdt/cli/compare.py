"""sdt status / semantic / parsetree commands."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

import click

from sdt.cli.options import DEFAULT_SOURCE, check_targets, comparison_options
from sdt.compare.batch import ComparisonTarget, FileOutcome, matches_glob, run_batch
from sdt.compare.ops import CompareMode, Comparer
from sdt.compare.versions import LocalFileVersion, RevisionFileVersion
from sdt.config.loader import load_config
from sdt.config.models import LoggingConfig, SdtConfig
from sdt.core.console import pluralize, print_report, set_plain_output, status
from sdt.core.errors import ConfigError, ErrorCode
from sdt.core.logging import configure_logging, get_logger
from sdt.git.access import RepoAccess, is_revision_spec, strip_revision_spec
from sdt.git.errors import GitError, NotARepositoryError, RefNotFoundError
from sdt.git.models import ChangedFile, StatusEntry

log = get_logger(__name__)

_STATUS_SECTIONS = (
    ("staged", "Changes to be committed:", "added"),
    ("unstaged", "Changes not staged for commit:", "deleted"),
    ("untracked", "Untracked files:", "untracked"),
)


@dataclass
class Session:
    """Everything one invocation needs after option checking."""

    config: SdtConfig
    comparer: Comparer
    mode: CompareMode
    glob: str
    failures: int = 0

    def show(self, outcome: FileOutcome) -> None:
        if outcome.error is not None:
            status(outcome.render(), style="error")
            if outcome.error.code is not ErrorCode.UNSUPPORTED_LANGUAGE:
                self.failures += 1
        else:
            print_report(outcome.render())

    def compare(self, targets: Iterable[ComparisonTarget]) -> None:
        for outcome in run_batch(targets, self.comparer, mode=self.mode):
            self.show(outcome)


def _load_session(
    ctx: click.Context,
    mode: CompareMode,
    glob_pattern: str | None,
    minimal: bool,
    dumbterm: bool,
) -> Session:
    try:
        config = load_config(Path.cwd())
    except ConfigError as e:
        raise click.ClickException(e.message) from e

    render_update: dict[str, object] = {}
    if minimal:
        render_update["minimal"] = True
    if dumbterm:
        render_update["style"] = "dumbterm"
    if render_update:
        config = config.model_copy(
            update={"render": config.render.model_copy(update=render_update)}
        )

    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    if verbose:
        configure_logging(config=LoggingConfig(level="DEBUG", outputs=config.logging.outputs))
    else:
        configure_logging(config=config.logging)
    set_plain_output(config.render.style != "color")
    log.debug(
        "options",
        description=config.description,
        mode=mode.value,
        style=config.render.style,
        minimal=config.render.minimal,
        commands={k: c.argv("FILE")[:-1] for k, c in config.commands.items()},
    )

    try:
        comparer = Comparer.from_config(config)
    except ValueError as e:
        raise click.ClickException(f"Invalid correlation settings: {e}") from e
    return Session(
        config=config,
        comparer=comparer,
        mode=mode,
        glob=glob_pattern or config.glob,
    )


def _open_repo() -> RepoAccess:
    try:
        return RepoAccess(Path.cwd())
    except NotARepositoryError as e:
        raise click.ClickException(f"{e} (you are probably not in a git directory)") from e


def _compare_local(session: Session, src: str, dst: str) -> None:
    if Path(src).suffix != Path(dst).suffix:
        log.info("extension_mismatch", source=Path(src).suffix, destination=Path(dst).suffix)
    log.info("comparing_local_files", source=src, destination=dst)
    target = ComparisonTarget(
        path=src,
        before=LocalFileVersion(Path(src)),
        after=LocalFileVersion(Path(dst)),
    )
    session.compare([target])


def _compare_worktree_status(session: Session, access: RepoAccess, status_only: bool) -> None:
    entries = [e for e in access.status_entries() if matches_glob(e.path, session.glob)]
    if not entries:
        status("No changes detected", style="header")
        return

    for section, title, style in _STATUS_SECTIONS:
        in_section = [e for e in entries if e.section == section]
        if not in_section:
            continue
        status(title, style="header")
        for entry in in_section:
            status(f"{entry.label}:   {entry.path}", style=style, indent=8)
            if not status_only and entry.is_modified:
                session.compare([_head_to_worktree(access, entry)])


def _head_to_worktree(access: RepoAccess, entry: StatusEntry) -> ComparisonTarget:
    return ComparisonTarget(
        path=entry.path,
        before=RevisionFileVersion(access, "HEAD", entry.path),
        after=LocalFileVersion(access.path / entry.path),
    )


def _compare_revisions(
    session: Session,
    access: RepoAccess,
    src: str,
    dst: str | None,
    status_only: bool,
) -> None:
    src_rev = strip_revision_spec(src)
    dst_rev = strip_revision_spec(dst) if dst else None
    try:
        files = access.changed_files(src_rev, dst_rev)
    except RefNotFoundError as e:
        if dst_rev is None:
            msg = f"The indicated source branch/revision is unavailable: {src}"
        else:
            msg = f"One or both branches/revisions are unavailable: {src}, {dst}"
        raise click.ClickException(msg) from e

    files = [f for f in files if matches_glob(f.path, session.glob)]
    if not files:
        status("No changes detected", style="header")
        return

    groups: dict[str, list[ChangedFile]] = {}
    for changed in files:
        groups.setdefault(changed.status, []).append(changed)

    for key, title, style in (
        ("added", "New files created:", "added"),
        ("deleted", "Files removed from branch/revision:", "deleted"),
        ("renamed", "Files moved between branches/revisions:", "renamed"),
    ):
        if groups.get(key):
            status(title, style="header")
            for changed in groups[key]:
                name = f"{changed.old_path} => {changed.path}" if changed.old_path else changed.path
                status(name, style=style, indent=3)

    modified = groups.get("modified", [])
    if not modified:
        return
    if dst_rev is not None:
        status("Changes between branches/revisions:", style="header")
    else:
        status("Changes between branch/revision and current:", style="header")
    for changed in modified:
        status(changed.path, style="modified", indent=4)
        if status_only:
            continue
        after = (
            RevisionFileVersion(access, dst_rev, changed.path)
            if dst_rev is not None
            else LocalFileVersion(access.path / changed.path)
        )
        session.compare(
            [
                ComparisonTarget(
                    path=changed.path,
                    before=RevisionFileVersion(access, src_rev, changed.path),
                    after=after,
                )
            ]
        )


def _run(
    ctx: click.Context,
    mode: CompareMode,
    *,
    src: str,
    dst: str | None,
    glob_pattern: str | None,
    minimal: bool,
    dumbterm: bool,
    status_only: bool = False,
) -> None:
    problem = check_targets(src, dst, glob_pattern)
    if problem:
        raise click.UsageError(problem)

    session = _load_session(ctx, mode, glob_pattern, minimal, dumbterm)

    if not is_revision_spec(src):
        if status_only:
            raise click.UsageError("status compares branches/revisions, not local files")
        _compare_local(session, src, dst)
    else:
        access = _open_repo()
        try:
            if src == DEFAULT_SOURCE and dst is None:
                log.info("comparing_head_to_worktree")
                _compare_worktree_status(session, access, status_only)
            else:
                _compare_revisions(session, access, src, dst, status_only)
        except GitError as e:
            log.error("repository_read_failed", error=str(e))
            raise click.ClickException(str(e)) from e

    if session.failures:
        raise click.ClickException(f"{pluralize(session.failures, 'file')} could not be compared")


@click.command("status")
@comparison_options
@click.pass_context
def status_command(
    ctx: click.Context,
    src: str,
    dst: str | None,
    glob_pattern: str | None,
    minimal: bool,
    dumbterm: bool,
) -> None:
    """List all analyzable files modified since the source revision."""
    _run(
        ctx,
        CompareMode.NONE,
        src=src,
        dst=dst,
        glob_pattern=glob_pattern,
        minimal=minimal,
        dumbterm=dumbterm,
        status_only=True,
    )


@click.command("semantic")
@comparison_options
@click.pass_context
def semantic_command(
    ctx: click.Context,
    src: str,
    dst: str | None,
    glob_pattern: str | None,
    minimal: bool,
    dumbterm: bool,
) -> None:
    """List semantically meaningful changes (default: HEAD vs. working tree).

    \b
    Examples:
        sdt semantic -A 0e904fa3:
        sdt semantic --src my-file.go --dst /path/to/other.go
    """
    _run(
        ctx,
        CompareMode.SEMANTIC,
        src=src,
        dst=dst,
        glob_pattern=glob_pattern,
        minimal=minimal,
        dumbterm=dumbterm,
    )


@click.command("parsetree")
@comparison_options
@click.pass_context
def parsetree_command(
    ctx: click.Context,
    src: str,
    dst: str | None,
    glob_pattern: str | None,
    minimal: bool,
    dumbterm: bool,
) -> None:
    """Show full syntax tree differences where applicable.

    \b
    Example:
        sdt parsetree --src test-branch: --dst HEAD:
    """
    _run(
        ctx,
        CompareMode.PARSETREE,
        src=src,
        dst=dst,
        glob_pattern=glob_pattern,
        minimal=minimal,
        dumbterm=dumbterm,
    )
