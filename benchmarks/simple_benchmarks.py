from timeit import timeit

from pera.interpreter import Interpreter
from pera.types.symbol import Symbol
from pera.types.environment import Environment
from pera.types.table import Table

# Helpers to parse once, and to measure evaluation and closure snapshots separately
from pera.reader.parser import parse_program
from pera.evaluation.evaluator import evaluate


def time_evaluator(code: str, rounds: int) -> float:
    """Time the evaluator only. Parses once and repeatedly evaluates the same
    form in a fresh environment.
    """
    expr = parse_program(code)
    # Warmup
    evaluate(expr, Environment())
    # Timed
    return timeit(lambda: evaluate(expr, Environment()), number=rounds)


def bench_snapshot(n_bindings: int = 200, n_snapshots: int = 2000) -> float:
    """Cost of the deep copy taken by every `on` definition."""
    env = Environment()
    for i in range(n_bindings):
        t = Table()
        t.push(float(i))
        env.define(Symbol(f"v{i}"), t)
    return timeit(env.snapshot, number=n_snapshots)


FUNCTION_CALL_CODE = "on (add x y) + x y (add 1 2)"

TAIL_RECURSION_CODE = r"""
on (fact n acc)
  if <= n 1
    acc
    (fact - n 1 * n acc)
(fact 100 1)
"""

# Sum 1..N using tail recursion
ARITH_SUM_CODE = r"""
on (sum_n n acc)
  if <= n 0
    acc
    (sum_n - n 1 + acc n)
(sum_n 500 0)
"""

WHILE_LOOP_CODE = "to i 0 while < i 500 inc i"

TABLE_CODE = r"""
to t (table)
to i 0
while < i 200 (do (push t i) (inc i))
while < 0 # t pop t
"""


def _print_one(name: str, code: str, rounds: int) -> None:
    t = time_evaluator(code, rounds)
    print(f"Benchmark: {name}")
    print(f"  evaluator: {t:.6f}s  [rounds={rounds}]")


if __name__ == "__main__":
    print("Benchmark: closure snapshot (deep copy on definition)")
    print(f"  time: {bench_snapshot():.6f}s")

    _print_one("function application", FUNCTION_CALL_CODE, rounds=20000)
    _print_one("tail recursion (factorial)", TAIL_RECURSION_CODE, rounds=500)
    _print_one("arithmetic sum 1..500 (tail-rec)", ARITH_SUM_CODE, rounds=1000)
    _print_one("while loop 1..500", WHILE_LOOP_CODE, rounds=1000)
    _print_one("table push/pop", TABLE_CODE, rounds=200)

    print("Benchmark: million-step tail recursion")
    itp = Interpreter()
    code = "on (s n acc) if = n 0 acc (s - n 1 + n acc) (s 1000000 0)"
    print(f"  time: {timeit(lambda: itp.eval(code), number=1):.6f}s")
