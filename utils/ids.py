import random

# base58 alphabet used by NEAR transaction hashes
_BASE58 = '123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz'


def create_transaction_hash() -> str:
    # 44 chars is the base58 length of a 32-byte hash
    return ''.join(random.choices(_BASE58, k=44))
