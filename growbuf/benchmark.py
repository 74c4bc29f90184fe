"""
Exponential-size benchmarks for GrowableBuffer operations.

Each operation builds a buffer from random integers and exercises one
operation across the whole buffer. Input sizes double at every step, which
makes the amortized cost of append (and the O(log n) count of
reallocations) visible in the CSV report.
"""

from __future__ import annotations

import csv
import logging
import random
import statistics
import time
from typing import Callable

from .datastructures import GrowableBuffer

logger = logging.getLogger(__name__)

CSV_HEADER = [
    "Input Size",
    "Operation",
    "Average Time (ms)",
    "Std Dev Time (ms)",
    "Reallocations",
]


# ----------------------------
# Helper Functions
# ----------------------------

def generate_random_values(size: int) -> list[int]:
    """Generate a list of random integers of given size."""
    return [random.randint(0, 1000000) for _ in range(size)]


def _filled(data: list[int]) -> GrowableBuffer[int]:
    buf: GrowableBuffer[int] = GrowableBuffer(1)
    buf.extend(data)
    return buf


def measure_operation(operation: Callable[[list[int]], GrowableBuffer], input_size: int, iterations: int = 5):
    """Run the operation several times.

    Returns (average ms, std deviation ms, average reallocation count).
    """
    times = []
    reallocations = []
    for _ in range(iterations):
        data = generate_random_values(input_size)
        start = time.perf_counter()
        buf = operation(data)
        end = time.perf_counter()
        times.append((end - start) * 1000)  # convert to milliseconds
        reallocations.append(buf.reallocations)

    avg_time = statistics.mean(times)
    std_time = statistics.stdev(times) if len(times) > 1 else 0.0
    return avg_time, std_time, statistics.mean(reallocations)


# ----------------------------
# Operations to Benchmark
# ----------------------------

def bench_append(data):
    return _filled(data)


def bench_remove_back(data):
    buf = _filled(data)
    while buf:
        buf.remove_back()
    return buf


def bench_remove_front(data):
    buf = _filled(data)
    while buf:
        buf.remove_front()
    return buf


def bench_get(data):
    buf = _filled(data)
    for i in range(len(buf)):
        _ = buf.get(i)
    return buf


def bench_set(data):
    buf = _filled(data)
    for i, v in enumerate(reversed(data)):
        buf.set(i, v)
    return buf


OPERATIONS = {
    "append": bench_append,
    "remove_back": bench_remove_back,
    "remove_front": bench_remove_front,
    "get": bench_get,
    "set": bench_set,
}


# ----------------------------
# Benchmark Runner
# ----------------------------

def run_benchmarks(output_file: str, base_input: int = 100, steps: int = 8, iterations: int = 5):
    """Benchmark every operation at sizes base_input * 2**i and write a CSV.

    Returns the written rows (without the header).
    """
    if base_input < 1 or steps < 1 or iterations < 1:
        raise ValueError("base_input, steps and iterations must be >= 1")

    input_sizes = [base_input * (2 ** i) for i in range(steps)]
    rows = []

    with open(output_file, "w", newline="") as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(CSV_HEADER)

        for op_name, op_func in OPERATIONS.items():
            for size in input_sizes:
                avg_time, std_time, avg_reallocs = measure_operation(op_func, size, iterations)
                row = [size, op_name, f"{avg_time:.3f}", f"{std_time:.3f}", f"{avg_reallocs:.0f}"]
                writer.writerow(row)
                rows.append(row)
                logger.info(
                    "%-12s | Size: %-8d | Avg Time: %.3f ms | Std Time: %.3f ms | Reallocations: %.0f",
                    op_name, size, avg_time, std_time, avg_reallocs,
                )

    return rows
