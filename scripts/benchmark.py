#!/usr/bin/env python3
"""Benchmark script for book catalog CRUD latency."""

import argparse
import statistics
import time

import httpx


def summarize(latencies: list[float]) -> dict:
    """Latency statistics in milliseconds."""
    return {
        "min": min(latencies),
        "max": max(latencies),
        "mean": statistics.mean(latencies),
        "median": statistics.median(latencies),
        "stdev": statistics.stdev(latencies) if len(latencies) > 1 else 0,
        "p95": sorted(latencies)[int(len(latencies) * 0.95)],
    }


def benchmark_books(base_url: str, num_requests: int) -> dict:
    """
    Run create/update/list/delete cycles and return per-operation statistics.

    Every book created by the run is deleted again, so the collection ends
    where it started.
    """
    latencies: dict[str, list[float]] = {"create": [], "update": [], "list": [], "delete": []}
    errors = 0

    print(f"Benchmarking {num_requests} CRUD cycles against {base_url}...")
    print()

    with httpx.Client(base_url=base_url, timeout=30.0) as client:
        for i in range(num_requests):
            try:
                start = time.perf_counter()
                response = client.post(
                    "/books",
                    json={"title": f"Benchmark {i}", "author": "bench"},
                )
                latencies["create"].append((time.perf_counter() - start) * 1000)
                if response.status_code != 201:
                    errors += 1
                    print(f"  Cycle {i + 1}: create ERROR ({response.status_code})")
                    continue
                book_id = response.json()["id"]

                start = time.perf_counter()
                response = client.put(
                    f"/books/{book_id}",
                    json={"title": f"Benchmark {i} (edited)", "author": "bench"},
                )
                latencies["update"].append((time.perf_counter() - start) * 1000)

                start = time.perf_counter()
                client.get("/books")
                latencies["list"].append((time.perf_counter() - start) * 1000)

                start = time.perf_counter()
                response = client.delete(f"/books/{book_id}")
                latencies["delete"].append((time.perf_counter() - start) * 1000)
                if response.status_code != 204:
                    errors += 1
                    print(f"  Cycle {i + 1}: delete ERROR ({response.status_code})")

            except httpx.HTTPError as e:
                errors += 1
                print(f"  Cycle {i + 1}: EXCEPTION ({e})")

    if not latencies["create"]:
        return {"error": "All requests failed"}

    return {
        "total_cycles": num_requests,
        "failed_cycles": errors,
        "latency_ms": {op: summarize(values) for op, values in latencies.items() if values},
    }


def main():
    parser = argparse.ArgumentParser(description="Benchmark book catalog service")
    parser.add_argument(
        "--url",
        default="http://localhost:3000",
        help="Base URL of the book service",
    )
    parser.add_argument(
        "--requests",
        type=int,
        default=10,
        help="Number of CRUD cycles to run",
    )

    args = parser.parse_args()

    print("=" * 50)
    print("Book Catalog Benchmark")
    print("=" * 50)
    print()

    results = benchmark_books(base_url=args.url, num_requests=args.requests)

    print()
    print("=" * 50)
    print("Results")
    print("=" * 50)
    print()

    if "error" in results:
        print(f"Error: {results['error']}")
        return

    print(f"Total cycles:        {results['total_cycles']}")
    print(f"Failed:              {results['failed_cycles']}")

    for op, stats in results["latency_ms"].items():
        print()
        print(f"{op.capitalize()} latency (ms):")
        print(f"  Min:               {stats['min']:.2f}")
        print(f"  Max:               {stats['max']:.2f}")
        print(f"  Mean:              {stats['mean']:.2f}")
        print(f"  Median:            {stats['median']:.2f}")
        print(f"  Std Dev:           {stats['stdev']:.2f}")
        print(f"  P95:               {stats['p95']:.2f}")


if __name__ == "__main__":
    main()
