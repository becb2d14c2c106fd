"""
src/primality_core/modular.py
Aritmética Modular Tier-64 (Overflow-Safe).
Suma, resta, producto y potencia módulo m sin formar nunca un intermedio
mayor que el propio módulo.
"""

# =============================================================================
# DOMINIO NUMÉRICO
# =============================================================================
# Todos los valores viven en [0, 2^64 - 1]. Python no desborda, pero los
# algoritmos respetan la disciplina de 64 bits: ningún intermedio supera 2*m.
UINT64_MAX = 0xFFFFFFFFFFFFFFFF


def mod_add(a: int, b: int, m: int) -> int:
    """
    Suma modular (a + b) mod m.
    Si a + b >= m hay que restar m; para no formar a + b se compara a >= m - b.
    """
    a %= m
    b %= m

    if a >= m - b:
        return a - (m - b)
    return a + b


def mod_sub(a: int, b: int, m: int) -> int:
    """
    Resta modular (a - b) mod m.
    Nunca produce un intermedio negativo (dominio sin signo).
    """
    a %= m
    b %= m

    if a < b:
        return m - b + a
    return a - b


def mod_mul(a: int, b: int, m: int) -> int:
    """
    Producto modular (a * b) mod m por Double-and-Add.
    O(log b) llamadas a mod_add; el producto completo nunca se materializa.
    """
    a %= m
    b %= m

    r = 0
    while b > 0:
        if b & 1:
            r = mod_add(r, a, m)
        b >>= 1
        a = mod_add(a, a, m)
    # El resultado se acumula en r, no en a
    return r


def mod_pow(a: int, b: int, m: int) -> int:
    """
    Potencia modular (a ^ b) mod m por Square-and-Multiply.

    Solo se reduce la base. El exponente NO se reduce módulo m: el ciclo
    multiplicativo del anillo no es m y aquí no se calcula.
    Con b == 0 el bucle no corre y se devuelve la identidad (1 % m).
    """
    if a >= m:
        a %= m

    # 1 % m: con m == 1 el anillo es trivial y la identidad es 0
    r = 1 % m
    while b > 0:
        if b & 1:
            r = mod_mul(r, a, m)
        b >>= 1
        a = mod_mul(a, a, m)

    return r
