# qcsim/plot_results.py
import argparse, csv, os
import matplotlib.pyplot as plt
from collections import defaultdict
from statistics import median

DATA_DIR = os.path.join(os.path.dirname(__file__), "..", "data")

def load_rows(path):
    rows = []
    with open(path, "r") as f:
        for row in csv.DictReader(f):
            row["qubits"]  = int(row["qubits"])
            row["depth"]   = int(row["depth"])
            row["threads"] = int(row["threads"])
            row["wall_ms"] = float(row["wall_ms"])
            rows.append(row)
    return rows

def median_by(rows, key):
    """[(key value, median wall_ms)] sorted by key."""
    buckets = defaultdict(list)
    for r in rows:
        buckets[r[key]].append(r["wall_ms"])
    return sorted((k, float(median(v))) for k, v in buckets.items())

def _save(xlabel, ylabel, title, out_path, log=False):
    plt.xlabel(xlabel)
    plt.ylabel(ylabel)
    plt.title(title)
    if log:
        plt.yscale("log")
    plt.grid(True, which="both", ls="--", lw=0.5)
    plt.tight_layout()
    plt.savefig(out_path, dpi=200)
    plt.close()

def plot_runtime_vs(rows, key, tag, out_dir):
    pts = median_by(rows, key)
    if not pts:
        return None
    xs, ys = zip(*pts)
    plt.figure()
    plt.plot(xs, ys, marker="o")
    out = os.path.join(out_dir, f"runtime_vs_{key}_{tag}.png")
    _save(key.capitalize(), "Runtime (ms)", f"Runtime vs {key.capitalize()} [{tag}]", out)
    return out

def plot_speedup_vs_threads(rows, tag, out_dir):
    pts = median_by(rows, "threads")
    t1 = dict(pts).get(1)
    if not t1:
        return None
    xs = [t for t, _ in pts]
    ys = [t1 / w for _, w in pts]
    plt.figure()
    plt.plot(xs, ys, marker="o")
    out = os.path.join(out_dir, f"speedup_vs_threads_{tag}.png")
    _save("Threads", "Speedup (T1/Tt)", f"Speedup vs Threads [{tag}]", out)
    return out

def plot_qubits_compare(data_dir):
    curves = {}
    for be in ("serial", "numba"):
        p = os.path.join(data_dir, be, "qubits.csv")
        if os.path.exists(p):
            curves[be] = median_by(load_rows(p), "qubits")
    if not curves:
        return None
    plt.figure()
    for be, pts in curves.items():
        xs, ys = zip(*pts)
        plt.plot(xs, ys, marker="o", label=be)
    plt.legend()
    out = os.path.join(data_dir, "runtime_vs_qubits_compare.png")
    _save("Qubits (n)", "Runtime (ms, log scale)", "Runtime vs Qubits (serial vs numba)", out, log=True)
    return out


def main(argv=None):
    p = argparse.ArgumentParser(description="Plot qcsim benchmark CSVs found under data/")
    p.add_argument("--data-dir", type=str, default=DATA_DIR)
    args = p.parse_args(argv)

    csvs = []
    for root, _, files in os.walk(args.data_dir):
        csvs.extend(os.path.join(root, f) for f in files if f.endswith(".csv"))
    if not csvs:
        print("No CSV files found under", args.data_dir)
        return

    for path in sorted(csvs):
        tag = os.path.splitext(os.path.basename(path))[0]
        backend = os.path.basename(os.path.dirname(path))
        try:
            rows = load_rows(path)
        except (OSError, KeyError, ValueError) as e:
            print(f"Skipping {path}: {e}")
            continue
        print(f"Plotting from {backend}/{tag}.csv ({len(rows)} rows)...")
        out_dir = os.path.dirname(path)
        if tag.startswith("threads"):
            plot_speedup_vs_threads(rows, backend, out_dir)
            plot_runtime_vs(rows, "threads", backend, out_dir)
        elif tag.startswith("depth"):
            plot_runtime_vs(rows, "depth", backend, out_dir)
        else:
            plot_runtime_vs(rows, "qubits", backend, out_dir)
    plot_qubits_compare(args.data_dir)
    print("\nSaved all plots under data/<backend>/*.png")


if __name__ == "__main__":
    main()
