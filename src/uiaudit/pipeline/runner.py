"""Audit session orchestration: discovery, per-container evaluation, aggregation."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

from uiaudit.core.aggregator import aggregate
from uiaudit.core.evaluator import evaluate_node
from uiaudit.io.asset_store import AssetStore
from uiaudit.io.scene_io import (
    discover_containers,
    iter_layout_nodes,
    load_container,
)
from uiaudit.models.config import ScanConfig
from uiaudit.models.finding import Finding
from uiaudit.models.policy import Policy
from uiaudit.pipeline.signals import ShutdownHandler, worker_init

logger = logging.getLogger(__name__)

console = Console()

NO_POLICY_STATUS = "No policy assigned."


@dataclass
class AuditResult:
    findings: list[Finding] = field(default_factory=list)
    containers_found: int = 0
    containers_processed: int = 0
    containers_failed: int = 0
    aborted: bool = False
    status: str = ""
    failures: dict[str, str] = field(default_factory=dict)


def evaluate_container(path: str, policy: Policy, config: ScanConfig) -> list[Finding]:
    """Evaluate every image placement in one container, in document order.

    Raises ContainerLoadError when the container cannot be opened. Nodes that
    fail to evaluate are skipped.
    """
    snapshot = load_container(path)
    store = AssetStore(config.assets_root)
    findings: list[Finding] = []
    for node in iter_layout_nodes(snapshot, store):
        try:
            finding = evaluate_node(node, policy, config)
        except (ArithmeticError, ValueError) as e:
            logger.debug("skipping %s in %s: %s", node.path, node.container, e)
            continue
        if finding is not None:
            findings.append(finding)
    return findings


def run_audit(
    target: str | Path,
    policy: Policy | None,
    config: ScanConfig | None = None,
    shutdown: ShutdownHandler | None = None,
) -> AuditResult:
    """Scan every container under target and return ranked findings.

    When no shutdown handler is passed, one is installed for the duration of
    the scan so Ctrl+C aborts between containers.
    """
    if policy is None:
        return AuditResult(status=NO_POLICY_STATUS)

    config = config or ScanConfig()
    if shutdown is not None:
        return _run_audit_inner(str(target), policy, config, shutdown)

    shutdown = ShutdownHandler()
    shutdown.install()
    try:
        return _run_audit_inner(str(target), policy, config, shutdown)
    finally:
        shutdown.uninstall()


def _run_audit_inner(
    target: str,
    policy: Policy,
    config: ScanConfig,
    shutdown: ShutdownHandler,
) -> AuditResult:
    containers = discover_containers(target, config.extensions, config.exclude_dirs)
    result = AuditResult(containers_found=len(containers))
    per_container: dict[int, list[Finding]] = {}

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(bar_width=40),
        MofNCompleteColumn(),
        TextColumn("•"),
        TimeElapsedColumn(),
        TextColumn("•"),
        TimeRemainingColumn(),
        console=console,
        transient=True,
    )

    with progress:
        task = progress.add_task("[bold blue]Auditing containers", total=len(containers))

        if config.workers <= 1 or len(containers) <= 1:
            for index, path in enumerate(containers):
                if shutdown.is_shutting_down:
                    break
                try:
                    per_container[index] = evaluate_container(path, policy, config)
                except Exception as e:
                    _record_failure(result, path, e)
                progress.update(task, advance=1)
        else:
            workers = min(config.workers, len(containers))
            with ProcessPoolExecutor(max_workers=workers, initializer=worker_init) as executor:
                futures: dict[Future[list[Finding]], int] = {
                    executor.submit(evaluate_container, path, policy, config): index
                    for index, path in enumerate(containers)
                }
                for future in as_completed(futures):
                    if shutdown.is_shutting_down:
                        progress.update(task, description="[yellow]Aborting...")
                        for f in futures:
                            f.cancel()
                        break

                    index = futures[future]
                    try:
                        per_container[index] = future.result()
                    except Exception as e:
                        _record_failure(result, containers[index], e)
                    progress.update(task, advance=1)

    findings = [f for index in sorted(per_container) for f in per_container[index]]
    result.findings = aggregate(findings, config.sort_by_impact)
    result.containers_processed = len(per_container)
    result.aborted = shutdown.is_shutting_down
    result.status = (
        f"Scanned {result.containers_processed} of {result.containers_found} containers. "
        f"Usages: {len(result.findings)}."
    )
    if result.aborted:
        result.status += " Aborted."
    return result


def _record_failure(result: AuditResult, path: str, error: Exception) -> None:
    logger.debug("container %s failed: %s", path, error)
    result.containers_failed += 1
    result.failures[path] = str(error)
