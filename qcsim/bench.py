# qcsim/bench.py
import argparse, csv, os, socket, subprocess, time, platform
from datetime import datetime
import numpy as np
from .circuit import Circuit
from .config import SimConfig

DATA_DIR = os.path.join(os.path.dirname(__file__), "..", "data")

def backend_dir(backend, data_dir=None):
    path = os.path.join(data_dir or DATA_DIR, backend)
    os.makedirs(path, exist_ok=True)
    return path

def run_once(circ, backend, cfg, threads=None):
    # measurements are seeded so timings are repeatable; norm check off
    return circ.run(backend=backend, config=cfg, rng=0, num_threads=threads, check_norm=False)

def warmup(circ, backend, cfg):
    # one dummy run to JIT-compile & warm caches
    run_once(circ, backend, cfg)

# ---------------------------------------------------------------------

def git_commit():
    try:
        return subprocess.check_output(["git", "rev-parse", "--short", "HEAD"],
                                       stderr=subprocess.DEVNULL).decode().strip()
    except (OSError, subprocess.CalledProcessError):
        return ""

def meta_row():
    return {
        "hostname": socket.gethostname(),
        "commit": git_commit(),
        "dtype": "complex128",
        "timestamp": datetime.now().isoformat(timespec="seconds"),
    }

HEADER = ["qubits","depth","backend","threads","gates","measures","wall_ms","hostname","commit","dtype","timestamp"]

def new_csv(path):
    """Create/overwrite CSV with header."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", newline="") as f:
        csv.DictWriter(f, fieldnames=HEADER).writeheader()

def write_row(path, row):
    with open(path, "a", newline="") as f:
        csv.DictWriter(f, fieldnames=HEADER).writerow(row)

# ---------------------------------------------------------------------

def random_circuit(n, depth, seed=0, measure=False):
    """Alternating layers: random single-qubit gates, then CNOTs on neighbour pairs."""
    rng = np.random.default_rng(seed)
    names = ("H", "X", "Y", "Z")
    c = Circuit.empty(n)
    for layer in range(depth):
        if layer % 2 == 0:
            for k in range(n):
                c.gate(names[int(rng.integers(0, len(names)))], k)
        else:
            for k in range(0, n-1, 2):
                if rng.integers(0, 2) == 0:
                    c.cnot(k, k+1)
                else:
                    c.cnot(k+1, k)
    if measure:
        for k in range(n):
            c.measure(k)
    return c

def time_run(circ, backend, cfg, threads=None):
    t0 = time.perf_counter()
    run_once(circ, backend, cfg, threads)
    return (time.perf_counter() - t0) * 1e3  # ms

def numba_max_threads():
    try:
        from numba import config as nb_config
    except ImportError:
        return os.cpu_count() or 1
    return nb_config.NUMBA_NUM_THREADS

def row(circ, depth, backend, threads, wall):
    m = meta_row()
    return {
        "qubits": circ.n, "depth": depth, "backend": backend, "threads": threads,
        "gates": sum(1 for name, _ in circ.ops if name != "MEASURE"),
        "measures": sum(1 for name, _ in circ.ops if name == "MEASURE"),
        "wall_ms": f"{wall:.3f}", **m,
    }

# ---------------------------------------------------------------------
# individual experiments

def bench_qubits(ns, depth, backend, out_path, cfg, measure=False):
    print(f"[run] Qubits scaling → {out_path}")
    new_csv(out_path)
    threads = 0 if backend == "serial" else numba_max_threads()
    warmup(random_circuit(min(ns), depth, seed=42, measure=measure), backend, cfg)
    for n in ns:
        circ = random_circuit(n, depth, seed=42, measure=measure)
        wall = time_run(circ, backend, cfg)
        write_row(out_path, row(circ, depth, backend, threads, wall))
        print(f"  n={n}  wall={wall:.2f} ms")
    print("✓ done.\n")

def bench_threads(n, depth, threads_list, out_path, cfg):
    from .apply_numba import set_threads
    print(f"[run] Thread scaling → {out_path}")
    new_csv(out_path)
    circ = random_circuit(n, depth, seed=123)
    pool = numba_max_threads()
    set_threads(1)
    warmup(circ, "numba", cfg)
    t1 = time_run(circ, "numba", cfg, threads=1)
    print(f"  pool={pool}  T1={t1:.1f} ms")

    for t in threads_list:
        tt = min(int(t), pool)
        if tt != t:
            print(f"  requested t={t} > pool={pool}; using t={tt}")
        wall = time_run(circ, "numba", cfg, threads=tt)
        speedup = t1 / wall if wall > 0 else float("nan")
        write_row(out_path, row(circ, depth, "numba", tt, wall))
        print(f"  t={tt}  wall={wall:.2f} ms  speedup={speedup:.2f}×")
    print("✓ done.\n")

def bench_depth(n, depths, backend, out_path, cfg):
    print(f"[run] Depth scaling → {out_path}")
    new_csv(out_path)
    threads = 0 if backend == "serial" else numba_max_threads()
    warmup(random_circuit(n, min(depths), seed=7), backend, cfg)
    for d in depths:
        circ = random_circuit(n, d, seed=7)
        wall = time_run(circ, backend, cfg)
        write_row(out_path, row(circ, d, backend, threads, wall))
        print(f"  depth={d}  wall={wall:.2f} ms")
    print("✓ done.\n")

# ---------------------------------------------------------------------
def main(argv=None):
    p = argparse.ArgumentParser(description="qcsim benchmarks → data/<backend>/*.csv")
    p.add_argument("--max-qubits", type=int, default=None,
                   help="raise the qubit cap (default: QCSIM_MAX_QUBITS or 8)")
    p.add_argument("--data-dir", type=str, default=None)
    sub = p.add_subparsers(dest="cmd", required=True)

    p_qubits = sub.add_parser("qubits")
    p_qubits.add_argument("--ns", type=str, default="1,2,3,4,5,6,7,8")
    p_qubits.add_argument("--depth", type=int, default=100)
    p_qubits.add_argument("--backend", type=str, default="numba", choices=["serial","numba"])
    p_qubits.add_argument("--measure", action="store_true", help="measure every qubit at the end")

    p_threads = sub.add_parser("threads")
    p_threads.add_argument("--n", type=int, default=8)
    p_threads.add_argument("--depth", type=int, default=200)
    p_threads.add_argument("--threads", type=str, default="1,2,4,8")

    p_depth = sub.add_parser("depth")
    p_depth.add_argument("--n", type=int, default=8)
    p_depth.add_argument("--depths", type=str, default="10,50,100,300,600")
    p_depth.add_argument("--backend", type=str, default="numba", choices=["serial","numba"])

    args = p.parse_args(argv)
    cfg = SimConfig.from_env(**({"max_qubits": args.max_qubits} if args.max_qubits else {}))
    backend = getattr(args, "backend", "numba")
    base = backend_dir(backend, args.data_dir)

    if args.cmd == "qubits":
        ns = [int(x) for x in args.ns.split(",")]
        bench_qubits(ns, args.depth, backend, os.path.join(base, "qubits.csv"), cfg, measure=args.measure)

    elif args.cmd == "threads":
        ts = [int(x) for x in args.threads.split(",")]
        bench_threads(args.n, args.depth, ts, os.path.join(base, "threads.csv"), cfg)

    elif args.cmd == "depth":
        ds = [int(x) for x in args.depths.split(",")]
        bench_depth(args.n, ds, backend, os.path.join(base, "depth.csv"), cfg)

if __name__ == "__main__":
    main()
