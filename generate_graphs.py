import matplotlib.pyplot as plt

from paging import Job
from simulator import DEFAULT_ALGORITHMS, build_job_table, compare_policies, random_trace


def collect_results(jobs, page_size, frame_counts, trace,
                    algorithms=DEFAULT_ALGORITHMS):
    # frame count -> algorithm -> fault ratio
    results = {}
    for num_frames in frame_counts:
        runs = compare_policies(jobs, page_size, num_frames, trace, algorithms)
        results[num_frames] = {
            algorithm: run.stats.fail_ratio for algorithm, run in runs.items()
        }
    return results


def plot_results(results, output='algorithm_comparison.png'):
    frame_counts = list(results)
    algorithms = list(results[frame_counts[0]])

    fig, ax = plt.subplots(figsize=(10, 5))
    fig.suptitle('Page Replacement Algorithm Comparison', fontsize=14, fontweight='bold')

    x = range(len(frame_counts))
    width = 0.8 / len(algorithms)
    for idx, algorithm in enumerate(algorithms):
        ratios = [results[n][algorithm] for n in frame_counts]
        offset = (idx - (len(algorithms) - 1) / 2) * width
        bars = ax.bar([i + offset for i in x], ratios, width, label=algorithm)
        for bar in bars:
            height = bar.get_height()
            ax.text(bar.get_x() + bar.get_width()/2., height,
                    f'{height:.2f}', ha='center', va='bottom', fontsize=8)

    ax.set_title('Page Fault Ratio by Frame Count')
    ax.set_xlabel('Frames')
    ax.set_ylabel('Fault Ratio')
    ax.set_xticks(list(x))
    ax.set_xticklabels([str(n) for n in frame_counts])
    ax.set_ylim(0, 1.1)
    ax.grid(axis='y', alpha=0.3)
    ax.legend(frameon=True)

    plt.tight_layout()
    plt.savefig(output, dpi=300, bbox_inches='tight')
    return fig


def main():
    page_size = 100
    jobs = [Job(0, 450), Job(1, 320), Job(2, 780), Job(3, 150)]
    frame_counts = [2, 4, 6, 8, 10, 12]

    print("Running simulations...")
    trace = random_trace(build_job_table(jobs, page_size), 500, seed=571)
    results = collect_results(jobs, page_size, frame_counts, trace)

    print(f"{'Frames':<8}" + "".join(f"{alg:<10}" for alg in DEFAULT_ALGORITHMS))
    for num_frames, ratios in results.items():
        print(f"{num_frames:<8}" + "".join(f"{ratios[alg]:<10.2f}" for alg in DEFAULT_ALGORITHMS))

    plot_results(results)
    print("\nGraph saved as 'algorithm_comparison.png'")
    plt.show()


if __name__ == '__main__':
    main()
