"""Quick start example for apocalypse_search.

Run this script to do a few small searches and generate sample plots.
"""

from pathlib import Path


def main():
    print("Apocalypse Search - Quick Start Demo")
    print("=" * 50)

    output_dir = Path("output")
    output_dir.mkdir(exist_ok=True)

    print("\n1. Sweeping all 2-digit sequences over 2^n until 200 powers in a row contain them all...")
    from apocalypse_search import SearchParameters, power_sweep

    params = SearchParameters(power=2, base=10, seq_len=2, safety=200)
    result = power_sweep(params)
    summary = result.summary()
    print(f"   Searched n=1..{result.last_index}, last non-matching power was {result.last_any_absent}")
    print(f"   Non-match mean={summary.mean:.2f}, std={summary.std:.2f}")
    for pattern, deviation in summary.outliers:
        print(f"   Outlier {pattern}: {deviation:+d}")

    from apocalypse_search.visualization.plots import plot_non_match_deviations

    path = plot_non_match_deviations(summary, output_dir / "power_deviations.png", 10, 2, power=2)
    print(f"   Saved to {path}")

    print("\n2. Same sweep over 2000 random 100-digit numbers...")
    from apocalypse_search import RandomParameters, random_sweep

    random_result = random_sweep(RandomParameters(base=10, seq_len=2, length=100, stop=2000))
    random_summary = random_result.summary()
    print(f"   Non-match mean={random_summary.mean:.2f}, std={random_summary.std:.2f}")

    print("\n3. Saving and resuming a checkpoint...")
    from apocalypse_search.search.sweep import resume_sweep
    from apocalypse_search.utils.checkpoint import load_checkpoint, save_checkpoint

    first = power_sweep(SearchParameters(power=3, base=10, seq_len=1, stop=50))
    ckpt_path = save_checkpoint(output_dir / "checkpoint.json", first.counts,
                                SearchParameters(power=3, base=10, seq_len=1, stop=50), first.last_index)
    resumed = resume_sweep(load_checkpoint(ckpt_path), stop=100)
    print(f"   Resumed from n={first.last_index + 1} to n={resumed.last_index}, "
          f"counts={resumed.counts.tolist()}")

    print("\n4. Finding the limit for '666'...")
    from apocalypse_search.search.limit import limit_search
    from apocalypse_search.visualization.plots import plot_apocalypse_density

    limit = limit_search("666", stop=500)
    print(f"   Last power of 2 without 666 is 2^{limit.last_non_apocalypse}")
    plot_apocalypse_density(limit.apocalypse_n, output_dir / "density_666.png", "666")

    print("\n5. Drawing a fractal spiral for the golden ratio...")
    from apocalypse_search.visualization.fractal import PHI, plot_spiral

    plot_spiral(PHI, 5000, output_dir / "spiral_phi.png", label="phi")
    print(f"   Saved to {output_dir / 'spiral_phi.png'}")

    print("\n" + "=" * 50)
    print("Demo complete. Check the 'output' folder for images.")
    print("\nNext steps:")
    print("  - Run 'apocalypse-search --help' to see CLI options")
    print("  - Try 'apocalypse-search sweep --seq-length 3 --safety 10000 --save 10' for a full run")
    print("  - Try 'apocalypse-search limit --sequence 666 --stop 10000 --plot density.png'")


if __name__ == "__main__":
    main()
