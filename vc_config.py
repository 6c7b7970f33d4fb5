"""
Vector Commitment Configuration
Defaults for the value width, the RSA group and hash-to-prime parameters.
"""

import os

# RSA-2048 from the RSA Factoring Challenge; nobody knows its factorization
RSA2048_MODULUS = (
    "25195908475657893494027183240048398571429282126204032027777137836043662020707"
    "59555626401852588078440691829064124951508218929855914917618450280848912007284"
    "49926873928072877767359714183472702618963750149718246911650776133798590957000"
    "97330459748808428401797429100642458691817195118746121515172654632282216869987"
    "54918242243363725908514186546204357679842338718477444792073993423658482382428"
    "11981638150106748104516603773060562016196762561338441436038339044149526344321"
    "90114657544454178424020924616515723350778707749817125772467962926386356373289"
    "91215483143816789988504044536402352738195137863656439121201039712282212072035"
    "7"
)

# Value encoding
DEFAULT_VALUE_WIDTH = int(os.getenv('VC_VALUE_WIDTH', 8))
INDEX_BYTES = 8

# RSA group
DEFAULT_SECPARAM = int(os.getenv('VC_SECPARAM', 1024))
DEFAULT_MODULUS = os.getenv('VC_MODULUS') or RSA2048_MODULUS
DEFAULT_BASE = int(os.getenv('VC_BASE', 2))

# Hash-to-prime
DEFAULT_PRIME_BITS = int(os.getenv('VC_PRIME_BITS', 256))
MIN_PRIME_BITS = 128
MAX_PRIME_BITS = 256


class Config:
    """Configuration object"""

    def __init__(self):
        self.value_width = DEFAULT_VALUE_WIDTH
        self.index_bytes = INDEX_BYTES
        self.secparam = DEFAULT_SECPARAM
        self.modulus = int(DEFAULT_MODULUS) if DEFAULT_MODULUS else None
        self.base = DEFAULT_BASE
        self.prime_bits = DEFAULT_PRIME_BITS

        if self.value_width <= 0 or self.value_width % 8 != 0:
            raise ValueError(f"VC_VALUE_WIDTH must be a positive multiple of 8, got {self.value_width}")
        # Short primes collide across bit indices
        if not MIN_PRIME_BITS <= self.prime_bits <= MAX_PRIME_BITS:
            raise ValueError(f"VC_PRIME_BITS must be in [{MIN_PRIME_BITS}, {MAX_PRIME_BITS}], got {self.prime_bits}")

    @property
    def value_bytes(self):
        return self.value_width // 8

    @property
    def max_index(self):
        return (1 << (8 * self.index_bytes)) - 1


# Global configuration instance
config = Config()
