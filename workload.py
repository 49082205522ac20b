"""
Job workloads for the scheduling simulator.

- generate_jobs: synthetic workload with Poisson arrivals and exponential bursts
- load_jobs: read job definitions from a CSV (id,arrival,burst) or JSON file

Synthetic workloads are seeded so SRTN and Round Robin can be compared on exactly
the same jobs.
"""
import csv
import json
import os

import numpy as np

from jobs import Job


def generate_jobs(
    num_jobs=8,
    arrival_rate=0.5,       # jobs per time unit
    mean_burst=4.0,         # mean CPU time per job
    min_burst=1.0,          # bursts are clipped up to this value
    integer_times=True,     # round arrivals and bursts to whole time units
    seed=42
):
    """
    Generate a synthetic workload of jobs named J1..Jn.

    Args:
        num_jobs: Number of jobs to create
        arrival_rate: Rate of the Poisson arrival process; the first job arrives at 0
        mean_burst: Mean of the exponential burst distribution
        min_burst: Lower bound for burst times (must be > 0)
        integer_times: Round times to integers, which keeps Gantt charts readable
        seed: Seed for numpy's random generator

    Returns:
        List of Job objects ordered by arrival
    """
    np.random.seed(seed)

    jobs = []
    t = 0.0
    for i in range(num_jobs):
        if i > 0:
            # Interarrival time ~ Exponential(lambda = arrival_rate)
            t += np.random.exponential(1.0 / arrival_rate)
        burst = max(min_burst, np.random.exponential(mean_burst))

        arrival = float(t)
        if integer_times:
            arrival = float(round(arrival))
            burst = float(max(round(burst), 1))
        jobs.append(Job(f"J{i + 1}", arrival, float(burst)))

    return jobs


def load_jobs(path):
    """
    Load job definitions from a .csv or .json file.

    CSV files need a header with the columns id, arrival and burst. JSON files hold a
    list of objects with the same keys (arrivalTime / burstTime are accepted too).
    """
    ext = os.path.splitext(path)[1].lower()
    with open(path, 'r', newline='') as f:
        if ext == ".json":
            rows = json.load(f)
        elif ext == ".csv":
            rows = list(csv.DictReader(f))
        else:
            raise ValueError(f"unsupported job file type {ext!r} (use .csv or .json)")
    return [Job.from_dict(row) for row in rows]


def save_jobs(jobs, path):
    """Write job definitions as CSV so a generated workload can be edited and re-run."""
    with open(path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(["id", "arrival", "burst"])
        for job in jobs:
            writer.writerow([job.jid, job.arrival, job.burst])
