"""Thin CLI wrapper for camelk_reconciler.

This module provides the command-line interface using Typer.
All reconciliation logic is delegated to core modules.
"""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console

from camelk_reconciler import __version__
from camelk_reconciler.config import get_settings, print_settings_json
from camelk_reconciler.errors import ReconcileError
from camelk_reconciler.types import BuildStrategy, IntegrationPhase, PodPhase

app = typer.Typer(
    name="camelk-reconciler",
    help="Camel K Reconciler - run the trait pipeline and build monitors locally",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"camel-k-reconciler version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Camel K Reconciler - run the trait pipeline and build monitors locally."""
    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def config(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show effective configuration."""
    settings = get_settings()
    if json_output:
        typer.echo(print_settings_json(settings))
        return

    catalog_display = (
        str(settings.catalog_path) if settings.catalog_path else "(built-in)"
    )
    console.print("[bold]Effective Configuration:[/bold]")
    console.print()
    console.print(f"  Namespace:           {settings.namespace}")
    console.print(f"  Build strategy:      {settings.build_strategy.value}")
    console.print(f"  Max builds:          {settings.max_concurrent_builds}")
    console.print(f"  Catalog:             {catalog_display}")
    console.print(f"  Database URL:        {settings.db_url}")
    console.print(f"  Log level:           {settings.log_level}")


traits_app = typer.Typer(help="Inspect the trait pipeline")
app.add_typer(traits_app, name="traits")


@traits_app.command("list")
def traits_list() -> None:
    """List built-in traits in execution order."""
    from camelk_reconciler.traits.catalog import default_traits

    for index, trait in enumerate(default_traits(), start=1):
        options = ", ".join(
            field.alias or name
            for name, field in trait.options_model.model_fields.items()
        )
        console.print(f"  {index}. [green]{trait.id}[/green] ({options})")


integration_app = typer.Typer(help="Reconcile Integration resources")
app.add_typer(integration_app, name="integration")


@integration_app.command("apply")
def integration_apply(
    path: Annotated[Path, typer.Argument(help="Integration YAML file")],
    catalog_path: Annotated[
        Path | None,
        typer.Option("--catalog", "-c", help="Camel catalog YAML file"),
    ] = None,
    phase: Annotated[
        IntegrationPhase | None,
        typer.Option("--phase", "-p", help="Override the integration phase"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Run the trait pipeline on an Integration and print staged resources."""
    from camelk_reconciler.catalog.io import get_catalog
    from camelk_reconciler.io import dump_yaml, load_integration
    from camelk_reconciler.traits.catalog import apply_traits

    settings = get_settings()

    try:
        integration = load_integration(path)
        catalog = get_catalog(catalog_path or settings.catalog_path)
    except (OSError, ValueError, ValidationError, yaml.YAMLError, ReconcileError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from None

    if phase is not None:
        integration.status.phase = phase

    try:
        env = apply_traits(integration, catalog, default_namespace=settings.namespace)
    except ReconcileError as e:
        console.print(f"[red]Error ({e.code}): {e}[/red]")
        raise typer.Exit(code=1) from None

    if json_output:
        output = {
            "integration": integration.to_manifest(),
            "resources": env.resources.to_manifests(),
        }
        typer.echo(json.dumps(output, indent=2))
        return

    status = integration.status
    console.print(f"[bold]Integration {integration.name}[/bold] ({status.phase.value})")
    if status.dependencies:
        console.print(f"  Dependencies: {', '.join(status.dependencies)}")
    for condition in status.conditions.values():
        color = "green" if condition.status.value == "True" else "yellow"
        console.print(
            f"  [{color}]{condition.type}={condition.status.value}[/{color}] "
            f"{condition.reason}: {condition.message}"
        )
    if len(env.resources):
        console.print()
        typer.echo(dump_yaml(env.resources.to_manifests()))
    else:
        console.print("[yellow]No resources staged[/yellow]")


build_app = typer.Typer(help="Reconcile Build resources")
app.add_typer(build_app, name="build")


@build_app.command("monitor")
def build_monitor(
    path: Annotated[Path, typer.Argument(help="Build YAML file")],
    pod_phase: Annotated[
        PodPhase | None,
        typer.Option("--pod-phase", help="Phase of the build pod (omit if missing)"),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Evaluate the pod monitor on a Build against a simulated build pod."""
    from camelk_reconciler.actions import BuildReconciler, MonitorPodAction
    from camelk_reconciler.builds.resource import build_pod_name
    from camelk_reconciler.io import load_build
    from camelk_reconciler.kube.client import InMemoryObjectStore
    from camelk_reconciler.kube.models import ObjectMeta, Pod, PodStatus

    settings = get_settings()

    try:
        build = load_build(path)
    except (OSError, ValueError, ValidationError, yaml.YAMLError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from None

    if "platform" not in build.spec.model_fields_set:
        build.spec.platform.build.build_strategy = settings.build_strategy
    if build.strategy != BuildStrategy.POD:
        console.print(
            f"[red]Error: build {build.metadata.name} uses the "
            f"{build.strategy.value} strategy; only pod builds can be "
            "monitored here[/red]"
        )
        raise typer.Exit(code=1)

    namespace = build.metadata.namespace or settings.namespace
    store = InMemoryObjectStore()
    if pod_phase is not None:
        store.add(
            Pod(
                metadata=ObjectMeta(
                    name=build_pod_name(build.spec.meta), namespace=namespace
                ),
                status=PodStatus(phase=pod_phase),
            )
        )

    reconciler = BuildReconciler([MonitorPodAction(store, namespace)])
    target = reconciler.reconcile(build)

    if json_output:
        output = {
            "changed": target is not None,
            "phase": (target or build).status.phase.value,
        }
        typer.echo(json.dumps(output, indent=2))
        return

    if target is None:
        console.print(f"Build {build.metadata.name} is up to date")
    else:
        console.print(
            f"Build {build.metadata.name}: "
            f"[green]{build.status.phase.value} -> {target.status.phase.value}[/green]"
        )


__all__ = ["app"]
