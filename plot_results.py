#!/usr/bin/env python3
"""
Render schedule results as figures.

1. Gantt chart: one row per CPU, productive slots coloured per job, idle slots
   hatched, switch overhead in grey
2. Ready-queue length over time (step plot of the queue snapshots)
3. Algorithm comparison: average turnaround time and CPU utilization side by side
"""
import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt
import numpy as np

import metrics

# Global styling, consistent across all figures
COLORS = {
    'SRTN': '#9467bd',   # purple
    'RR': '#1f77b4',     # blue
}
OVERHEAD_COLOR = '#808080'
IDLE_COLOR = '#ffffff'


def job_colors(job_ids):
    """Stable colour per job id, cycling through the tab20 palette."""
    cmap = plt.get_cmap('tab20')
    return {jid: cmap(i % 20) for i, jid in enumerate(sorted(job_ids))}


def plot_gantt(result, filename):
    """Gantt chart of every CPU's time slots."""
    colors = job_colors(result.job_results.keys())
    fig, ax = plt.subplots(figsize=(max(8, result.makespan * 0.6), 1.0 + 0.7 * result.cpu_count))

    for slot in result.cpu_time_slots:
        y = result.cpu_count - 1 - slot.cpu_id
        if slot.is_overhead:
            color, hatch, label = OVERHEAD_COLOR, None, ""
        elif slot.is_idle:
            color, hatch, label = IDLE_COLOR, '//', ""
        else:
            color, hatch, label = colors[slot.job_id], None, slot.job_id
        ax.barh(y, slot.duration, left=slot.start, height=0.6, color=color, hatch=hatch,
                edgecolor='black', linewidth=0.8)
        if label:
            ax.text(slot.start + slot.duration / 2, y, label, ha='center', va='center',
                    fontsize=9, fontweight='bold')

    ax.set_yticks(range(result.cpu_count))
    ax.set_yticklabels([f"CPU {i}" for i in reversed(range(result.cpu_count))])
    ax.set_xlabel("Time", fontsize=11, fontweight='bold')
    ax.set_xlim(0, max(result.makespan, 1.0))
    title = f"{result.algorithm} ({result.mode}"
    if result.quantum is not None:
        title += f", q={result.quantum:g}"
    title += f") | avg turnaround {result.average_turnaround_time:.2f}, utilization {result.cpu_utilization:.1f}%"
    ax.set_title(title, fontsize=11, fontweight='bold')
    ax.grid(True, alpha=0.2, axis='x', linestyle='--')

    plt.tight_layout()
    plt.savefig(filename, dpi=150, bbox_inches='tight')
    print(f"✓ Generated {filename}")
    plt.close(fig)


def plot_queue_lengths(result, filename):
    """Step plot of the ready-queue length at each snapshot instant."""
    timeline = metrics.queue_timeline(result.queue_snapshots)
    times = [t for t, _ in timeline]
    lengths = [len(ids) for _, ids in timeline]
    end = max(result.makespan, times[-1] if times else 0.0)

    fig, ax = plt.subplots(figsize=(8, 3))
    ax.step(times + [end], lengths + lengths[-1:], where='post',
            color=COLORS.get(result.algorithm, 'black'), linewidth=1.5)
    ax.set_xlabel("Time", fontsize=11, fontweight='bold')
    ax.set_ylabel("Ready jobs", fontsize=11, fontweight='bold')
    ax.set_title(f"{result.algorithm} ready queue", fontsize=12, fontweight='bold')
    ax.grid(True, alpha=0.2, linestyle='--')

    plt.tight_layout()
    plt.savefig(filename, dpi=150, bbox_inches='tight')
    print(f"✓ Generated {filename}")
    plt.close(fig)


def plot_comparison(results, filename):
    """
    Bar charts comparing several runs.

    Args:
        results: dict label -> ScheduleResult
        filename: Output image path
    """
    labels = list(results)
    x_pos = np.arange(len(labels))
    tat = [results[k].average_turnaround_time for k in labels]
    util = [results[k].cpu_utilization for k in labels]
    colors = [COLORS.get(results[k].algorithm, '#808080') for k in labels]

    fig, axes = plt.subplots(1, 2, figsize=(10, 4))
    axes[0].bar(x_pos, tat, color=colors, alpha=0.8, edgecolor='black')
    axes[0].set_ylabel("Average turnaround time", fontsize=11, fontweight='bold')
    axes[1].bar(x_pos, util, color=colors, alpha=0.8, edgecolor='black')
    axes[1].set_ylabel("CPU utilization (%)", fontsize=11, fontweight='bold')
    axes[1].set_ylim([0.0, 100.0])
    for ax in axes:
        ax.set_xticks(x_pos)
        ax.set_xticklabels(labels, fontsize=10)
        ax.grid(True, alpha=0.2, axis='y', linestyle='--')

    plt.tight_layout()
    plt.savefig(filename, dpi=150, bbox_inches='tight')
    print(f"✓ Generated {filename}")
    plt.close(fig)
