#!/usr/bin/env python3
"""
Run SRTN and/or Round Robin on a job list and report the results.

Jobs come from a CSV/JSON file (--jobs) or a seeded synthetic workload (--random).
Results are printed as tables and can be exported to JSON (full ScheduleResult),
CSV (one row per CPU time slot) and PNG figures.
"""
import argparse
import csv
import json
import sys

import metrics
from errors import ScheduleValidationError
from schedule import run_round_robin, run_srtn
from simulator import MODES, QUANTUM_BOUNDARY
from workload import generate_jobs, load_jobs


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Multi-CPU SRTN / Round Robin scheduling simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_schedule.py --random 6 --cpus 2 --quantum 2          # both algorithms
  python run_schedule.py --jobs jobs.csv --algorithm srtn --mode end-time
  python run_schedule.py --jobs jobs.json --overhead 0.5 --plot out/run
        """
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--jobs', type=str,
                        help='CSV (id,arrival,burst) or JSON file with job definitions')
    source.add_argument('--random', type=int, metavar='N',
                        help='Generate N synthetic jobs instead of reading a file')
    parser.add_argument('--seed', type=int, default=42,
                        help='Seed for --random workloads (default: 42)')
    parser.add_argument('--algorithm', choices=['srtn', 'rr', 'both'], default='both',
                        help='Scheduling algorithm to run (default: both)')
    parser.add_argument('--cpus', type=int, default=1,
                        help='Number of CPUs (default: 1)')
    parser.add_argument('--quantum', type=float, default=1.0,
                        help='Time quantum for RR and quantum-boundary mode (default: 1)')
    parser.add_argument('--mode', choices=MODES, default=QUANTUM_BOUNDARY,
                        help='Rescheduling mode (default: quantum)')
    parser.add_argument('--overhead', type=float, default=0.0,
                        help='CPU switching overhead (default: 0)')
    parser.add_argument('--output-json', type=str, default=None,
                        help='Write full results to this JSON file')
    parser.add_argument('--output-csv', type=str, default=None,
                        help='Write CPU time slots to this CSV file')
    parser.add_argument('--plot', type=str, default=None, metavar='PREFIX',
                        help='Write Gantt/queue/comparison PNGs using this filename prefix')
    parser.add_argument('--debug', action='store_true',
                        help='Print every scheduling event')
    return parser.parse_args(argv)


def run_algorithms(jobs, args):
    """Run the selected algorithms; returns dict algorithm name -> ScheduleResult."""
    results = {}
    if args.algorithm in ('srtn', 'both'):
        results['SRTN'] = run_srtn(jobs, args.cpus, mode=args.mode, overhead=args.overhead,
                                   quantum=args.quantum, debug=args.debug)
    if args.algorithm in ('rr', 'both'):
        results['RR'] = run_round_robin(jobs, args.cpus, args.quantum, mode=args.mode,
                                        overhead=args.overhead, debug=args.debug)
    return results


def print_results(jobs, results):
    by_id = {job.jid: job for job in jobs}
    for name, result in results.items():
        print("\n" + "=" * 72)
        print(f"{name}  mode={result.mode}  cpus={result.cpu_count}  quantum={result.quantum}  "
              f"overhead={result.overhead}")
        print("=" * 72)
        print(f"{'Job':<8} {'Arrival':>8} {'Burst':>8} {'Start':>8} {'End':>8} {'Turnaround':>11}")
        for jid in result.completion_order():
            r = result.job_results[jid]
            job = by_id[jid]
            print(f"{jid:<8} {job.arrival:>8.2f} {job.burst:>8.2f} {r.start_time:>8.2f} "
                  f"{r.end_time:>8.2f} {r.turnaround_time:>11.2f}")
        print(f"\nAverage turnaround time: {result.average_turnaround_time:.3f}")
        print(f"Average waiting time:    {metrics.average_waiting_time(result.job_results, jobs):.3f}")
        print(f"Average response time:   {metrics.average_response_time(result.job_results, jobs):.3f}")
        print(f"CPU utilization:         {result.cpu_utilization:.1f}%")
        print(f"Makespan:                {result.makespan:.2f}")


def write_json(results, filename):
    with open(filename, 'w') as f:
        json.dump({name: r.to_dict() for name, r in results.items()}, f, indent=2)
    print(f"✓ Results saved to {filename}")


def write_csv(results, filename):
    with open(filename, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['Algorithm', 'CPU', 'Job', 'Start', 'End', 'Idle', 'Overhead'])
        for name, result in results.items():
            for s in result.cpu_time_slots:
                writer.writerow([name, s.cpu_id, s.job_id, s.start, s.end, s.is_idle, s.is_overhead])
    print(f"✓ Time slots saved to {filename}")


def write_plots(results, prefix):
    import plot_results

    for name, result in results.items():
        plot_results.plot_gantt(result, f"{prefix}_{name.lower()}_gantt.png")
        plot_results.plot_queue_lengths(result, f"{prefix}_{name.lower()}_queue.png")
    if len(results) > 1:
        plot_results.plot_comparison(results, f"{prefix}_comparison.png")


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    if args.jobs:
        try:
            jobs = load_jobs(args.jobs)
        except (OSError, ValueError, KeyError, TypeError) as e:
            print(f"✗ Could not read jobs from {args.jobs}: {e}")
            return 2
    else:
        jobs = generate_jobs(num_jobs=args.random, seed=args.seed)

    try:
        results = run_algorithms(jobs, args)
    except ScheduleValidationError as e:
        print("✗ Invalid input:")
        for reason in e.reasons:
            print(f"  - {reason}")
        return 2

    print_results(jobs, results)

    if args.output_json:
        write_json(results, args.output_json)
    if args.output_csv:
        write_csv(results, args.output_csv)
    if args.plot:
        write_plots(results, args.plot)
    return 0


if __name__ == "__main__":
    sys.exit(main())
