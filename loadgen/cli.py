import asyncio
import threading
import time

import click
import uvicorn
from rich.console import Console

from loadgen.runner import TEST_PATHS, run_test
from loadgen.stats import print_report


def _start_server(host: str, port: int) -> threading.Thread:
    """Start the benchmark service in a background thread."""
    config = uvicorn.Config("worldbench.main:app", host=host, port=port, log_level="warning")
    server = uvicorn.Server(config)
    thread = threading.Thread(target=server.run, daemon=True)
    thread.start()
    return thread


@click.command()
@click.option("--server-url", default="http://localhost:8000", help="Base URL of the benchmark service")
@click.option(
    "--test",
    "tests",
    type=click.Choice([*TEST_PATHS, "all"]),
    default="all",
    help="Which database test to run",
)
@click.option("--queries", default=20, help="Value of the queries parameter for /queries and /updates")
@click.option("--num-requests", default=500, help="Number of requests per test")
@click.option("--concurrency", default=32, help="Max concurrent requests")
@click.option("--timeout", default=30.0, help="Request timeout in seconds")
@click.option("--serve/--no-serve", default=False, help="Start the service locally before testing")
@click.option("--port", default=8000, help="Port for the locally started service")
def main(
    server_url: str,
    tests: str,
    queries: int,
    num_requests: int,
    concurrency: int,
    timeout: float,
    serve: bool,
    port: int,
) -> None:
    """Load test runner for the World database benchmark."""
    console = Console()
    console.rule("[bold]World Database Load Test[/bold]")

    if serve:
        server_url = f"http://127.0.0.1:{port}"
        console.print(f"Starting benchmark service on port {port}...")
        _start_server("127.0.0.1", port)
        time.sleep(1)  # give it a moment to start

    console.print(f"Server: {server_url}")
    console.print(f"Requests: {num_requests}, Concurrency: {concurrency}, Queries: {queries}")
    console.print()

    selected = list(TEST_PATHS) if tests == "all" else [tests]
    results = []
    for test in selected:
        console.print(f"[bold green]Running /{test}...[/bold green]")
        result = asyncio.run(
            run_test(server_url, test, num_requests, concurrency, queries, timeout)
        )
        console.print(f"  Done: {len(result.latencies)} successful, {result.errors} errors")
        results.append(result)

    print_report(results)


if __name__ == "__main__":
    main()
