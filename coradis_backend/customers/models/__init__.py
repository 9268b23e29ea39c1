from .customer import Customer
from .scratch_card import ScratchCard

__all__ = [
    "Customer",
    "ScratchCard",
]
