"""
src/primality_core/miller_rabin.py
Miller-Rabin Determinista v1.0 (Tier-64).
Clasifica enteros de 64 bits como PRIMO o COMPUESTO sin error probabilístico.
"""
import logging
from enum import IntEnum
from typing import Tuple

from .modular import UINT64_MAX, mod_pow

logger = logging.getLogger(__name__)

# =============================================================================
# BASES TESTIGO (Constante de Proceso)
# =============================================================================
# Si n < 2^64 basta con probar a = 2, 3, 5, ..., 37.
# (Con 41 añadido el resultado cubre n < 3,317,044,064,679,887,385,961,981,
#  fuera del dominio de este módulo.)
WITNESS_BASES: Tuple[int, ...] = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)
BASELEN = len(WITNESS_BASES)


class Primality(IntEnum):
    COMPOSITE = 0
    PRIME = 1


def decompose(n: int) -> Tuple[int, int]:
    """
    Descomposición n - 1 = 2^s * q con q impar.

    Retorna (k, q) con k = s + 1: el contador arranca en 1 antes del primer
    desplazamiento. El bucle interno de miller_rabin recorre j = 0 .. k-2,
    es decir exactamente s escalones; ambos van emparejados.
    Ejemplo: n = 31 -> n - 1 = 30 = 0b11110 -> (k, q) = (2, 15).
    """
    temp = n - 1
    k = 1
    while temp >= 1:
        if temp & 1:
            break
        k += 1
        temp >>= 1
    return k, temp


def miller_rabin(n: int) -> Primality:
    """
    Test de Miller-Rabin determinista sobre las 12 bases testigo.

    Precondición (no se valida): n impar y n > 3. Usar is_prime() para
    entradas arbitrarias.

    Una base 'pasa' si a^q == 1 o si a^(q*2^j) == n - 1 para algún
    j en 0 .. k-2. La primera base que no pasa demuestra que n es compuesto
    y corta la búsqueda. Un solo paso no es concluyente (n = 9 pasa con la
    base 17), así que PRIME exige que pasen todas.
    """
    k, q = decompose(n)
    minus_one = n - 1

    for a in WITNESS_BASES:
        # a ≡ 0 (mod n) solo ocurre si n es una de las bases: no aporta evidencia
        if a % n == 0:
            continue

        x = mod_pow(a, q, n)
        if x == 1:
            continue

        for j in range(k - 1):
            if mod_pow(x, mod_pow(2, j, n), n) == minus_one:
                break
        else:
            logger.debug("n=%d compuesto: testigo a=%d (k=%d, q=%d)", n, a, k, q)
            return Primality.COMPOSITE

    return Primality.PRIME


def is_prime(n: int) -> Primality:
    """
    Fachada para entradas arbitrarias del dominio [0, 2^64 - 1].
    Aplica los filtros triviales (n <= 3, pares) antes del test.
    """
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"Expected an integer, got {type(n)}")
    if n < 0 or n > UINT64_MAX:
        raise ValueError(f"CRITICAL: {n} fuera del dominio de 64 bits sin signo.")

    if n == 2 or n == 3:
        return Primality.PRIME
    if n < 2 or (n & 1) == 0:
        return Primality.COMPOSITE
    return miller_rabin(n)
