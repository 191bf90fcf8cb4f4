# qcsim/cli.py
import argparse
import json
import logging
import sys

from . import gates as G
from .circuit import BACKENDS, Circuit
from .config import SimConfig
from .errors import QSimError
from .report import format_state, ket, probabilities, sample_counts

logger = logging.getLogger("qcsim")


def cmd_run(args) -> int:
    cfg = SimConfig.from_env(**({"max_qubits": args.max_qubits} if args.max_qubits else {}))
    circ = Circuit.parse(args.n, args.ops)
    res = circ.run(backend=args.backend, config=cfg, rng=args.seed, num_threads=args.threads)
    st = res.state

    if args.json:
        out = {"circuit": circ.describe(), "measurements": res.measurements, "state": st.to_dict()}
        if args.shots:
            out["counts"] = sample_counts(st, args.shots, rng=args.seed)
        print(json.dumps(out, indent=2, ensure_ascii=False))
        return 0

    for line in circ.describe():
        print(line)
    print(f"state: {format_state(st, threshold=cfg.significance)}")
    for i, p in enumerate(probabilities(st)):
        if p > cfg.significance:
            print(f"  {ket(i, st.n)}  {p:.4f}")
    for q, outcome in res.measurements:
        print(f"measured q{q} → {outcome}")
    if args.shots:
        for bits, cnt in sample_counts(st, args.shots, rng=args.seed).items():
            print(f"  {bits}: {cnt}")
    return 0

def cmd_gates(args) -> int:
    for name in G.names():
        m = G.get_gate(name)
        print(f"{name}: {m.tolist()}")
    for name in sorted(G.PARAMETRIC):
        print(f"{name}(theta)")
    return 0


def main(argv=None) -> int:
    p = argparse.ArgumentParser(prog="qcsim", description="Small state-vector quantum circuit simulator")
    p.add_argument("-v", "--verbose", action="count", default=0)
    sub = p.add_subparsers(dest="cmd", required=True)

    p_run = sub.add_parser("run", help="Run a circuit such as 'h 0; cnot 0 1; measure 0'")
    p_run.add_argument("ops", type=str)
    p_run.add_argument("-n", type=int, default=2, help="number of qubits")
    p_run.add_argument("--backend", type=str, default="serial", choices=list(BACKENDS))
    p_run.add_argument("--threads", type=int, default=None)
    p_run.add_argument("--seed", type=int, default=None)
    p_run.add_argument("--shots", type=int, default=0)
    p_run.add_argument("--max-qubits", type=int, default=None)
    p_run.add_argument("--json", action="store_true")
    p_run.set_defaults(func=cmd_run)

    p_gates = sub.add_parser("gates", help="List built-in gates")
    p_gates.set_defaults(func=cmd_gates)

    args = p.parse_args(argv)
    level = logging.WARNING if args.verbose == 0 else (logging.INFO if args.verbose == 1 else logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        return args.func(args)
    except QSimError as e:
        logger.error("%s", e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
