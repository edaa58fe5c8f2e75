import statistics

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from loadgen.runner import EndpointResult


def compute_percentiles(latencies: list[float], elapsed_s: float = 0.0) -> dict:
    if not latencies:
        return {"p50": 0, "p95": 0, "p99": 0, "min": 0, "max": 0, "mean": 0, "count": 0, "rps": 0}
    sorted_lat = sorted(latencies)
    n = len(sorted_lat)
    return {
        "p50": sorted_lat[int(n * 0.50)],
        "p95": sorted_lat[int(n * 0.95)] if n > 1 else sorted_lat[0],
        "p99": sorted_lat[int(n * 0.99)] if n > 1 else sorted_lat[0],
        "min": sorted_lat[0],
        "max": sorted_lat[-1],
        "mean": round(statistics.mean(sorted_lat), 2),
        "count": n,
        "rps": round(n / elapsed_s, 1) if elapsed_s > 0 else 0,
    }


def print_report(results: list[EndpointResult]) -> None:
    console = Console()
    console.print()
    console.rule("[bold blue]Database Test Results[/bold blue]")
    console.print()

    stats = {r.name: compute_percentiles(r.latencies, r.elapsed_s) for r in results}

    table = Table(title="Latency (ms)", show_lines=True)
    table.add_column("Metric", style="bold")
    for r in results:
        table.add_column(f"/{r.name}", justify="right", style="cyan")

    for m in ("count", "min", "p50", "p95", "p99", "max", "mean", "rps"):
        row = [m.upper()]
        for r in results:
            value = stats[r.name].get(m, 0)
            row.append(str(value) if m == "count" else f"{value:.1f}")
        table.add_row(*row)
    console.print(table)

    error_table = Table(title="Error Summary", show_lines=True)
    error_table.add_column("Test", style="bold")
    error_table.add_column("Errors", justify="right")
    error_table.add_column("Error rate", justify="right")
    for r in results:
        total = stats[r.name]["count"] + r.errors
        rate = r.errors / total * 100 if total else 0
        error_table.add_row(f"/{r.name}", str(r.errors), f"{rate:.1f}%")
    console.print(error_table)

    details = [
        f"/{r.name}: {count}x {err}"
        for r in results
        for err, count in r.error_details.most_common()
    ]
    if details:
        console.print()
        console.print(Panel("\n".join(details), title="[bold]Errors[/bold]", border_style="red"))
    console.print()
