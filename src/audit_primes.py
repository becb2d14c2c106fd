import sys
import time
import logging
import argparse
from multiprocessing import Pool, cpu_count
from sympy import isprime

from primality_core.miller_rabin import Primality, is_prime
from primality_core.modular import UINT64_MAX

# ==============================================================================
# AUDITORÍA CONTRA ORÁCULO (sympy.isprime)
# ==============================================================================

DEFAULT_TARGET = 1_000_000
BATCHES_PER_CORE = 8

FALSE_POSITIVE = "FALSO POSITIVO"
FALSE_NEGATIVE = "FALSO NEGATIVO"


def audit_worker(args):
    """Recorre los impares de [start, end) comparando con el oráculo."""
    _, start, end = args
    if (start & 1) == 0: start += 1

    fails = []
    curr = start
    while curr < end:
        res_mr = is_prime(curr) == Primality.PRIME
        res_true = isprime(curr) # Ground truth

        if res_mr != res_true:
            err = FALSE_POSITIVE if res_mr else FALSE_NEGATIVE
            fails.append((curr, err))
            print(f"🚨 FRACTURA: N={curr} | {err}", flush=True)

        curr += 2
    return fails


def build_tasks(start, stop, batches):
    """Parte [start, stop) en lotes contiguos (id, inicio, fin)."""
    if batches < 1:
        raise ValueError("batches debe ser >= 1")
    if start < 0 or stop > UINT64_MAX + 1:
        raise ValueError("CRITICAL: rango fuera del dominio de 64 bits.")
    if stop <= start:
        raise ValueError(f"Rango vacío: stop ({stop}) debe ser mayor que start ({start})")

    span = stop - start
    bounds = [start + (span * i) // batches for i in range(batches + 1)]
    tasks = []
    for lo, hi in zip(bounds, bounds[1:]):
        if hi > lo: # Lotes vacíos cuando el rango es menor que batches
            tasks.append((len(tasks) + 1, lo, hi))
    return tasks


def run_audit(start=3, stop=DEFAULT_TARGET, workers=None, batches=None):
    cores = workers if workers is not None else cpu_count()
    if cores < 1:
        raise ValueError("workers debe ser >= 1")
    batches = batches if batches is not None else cores * BATCHES_PER_CORE

    tasks = build_tasks(start, stop, batches)

    print(f"[*] INICIANDO AUDITORÍA MILLER-RABIN DETERMINISTA (TIER-64)")
    print(f"[*] Rango: [{start}, {stop}) | Workers: {cores} | Lotes: {len(tasks)}")
    print(f"[*] Oráculo: sympy.isprime")
    print("-" * 65)

    t0 = time.time()
    fails = []
    with Pool(cores) as pool:
        for i, res in enumerate(pool.imap_unordered(audit_worker, tasks)):
            fails.extend(res)
            if i % 10 == 0: print(f"   -> Progreso: Lotes {i} OK", flush=True)

    print("-" * 65)
    print(f"[*] Tiempo: {time.time()-t0:.2f}s")
    if not fails:
        print("\n🏆 MILLER-RABIN VALIDADO: CERO ERRORES.")
    else:
        print(f"\n❌ ERRORES DETECTADOS: {len(fails)}")
    return sorted(fails)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Audita miller_rabin contra sympy.isprime")
    parser.add_argument("--start", type=int, default=3, help="Inicio del rango (inclusive)")
    parser.add_argument("--stop", type=int, default=DEFAULT_TARGET, help="Fin del rango (exclusivo)")
    parser.add_argument("--workers", type=int, help="Procesos del pool (por defecto cpu_count)")
    parser.add_argument("--batches", type=int, help="Número de lotes")
    parser.add_argument("--verbose", action="store_true", help="Traza DEBUG de los testigos")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        fails = run_audit(args.start, args.stop, args.workers, args.batches)
    except ValueError as exc:
        parser.error(str(exc))
    return 1 if fails else 0


if __name__ == '__main__':
    sys.exit(main())
