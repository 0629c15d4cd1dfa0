"""
Sample customers the simulator types into the checkout form.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

SAMPLE_NAMES = (
    "John Smith",
    "Emma Wilson",
    "Michael Brown",
    "Sarah Davis",
    "James Johnson",
    "Emily Taylor",
    "David Martinez",
    "Jessica Anderson",
)

SAMPLE_EMAILS = (
    "john@example.com",
    "emma@test.com",
    "mike@demo.com",
    "sarah@sample.com",
    "james@email.com",
    "emily@mail.com",
    "david@test.org",
    "jessica@demo.net",
)

SAMPLE_ADDRESSES = (
    "123 Main St, New York, NY 10001",
    "456 Oak Ave, Los Angeles, CA 90001",
    "789 Pine Rd, Chicago, IL 60601",
    "321 Elm Blvd, Houston, TX 77001",
    "654 Maple Dr, Phoenix, AZ 85001",
)

TEST_CARD_NUMBER = "4111111111111111"


@dataclass(frozen=True, slots=True)
class SampleCustomer:
    name: str
    email: str
    address: str
    card_number: str = TEST_CARD_NUMBER

    @classmethod
    def pick(cls, rng: random.Random) -> SampleCustomer:
        """Each field drawn independently, so names and emails need not match."""
        return cls(
            name=rng.choice(SAMPLE_NAMES),
            email=rng.choice(SAMPLE_EMAILS),
            address=rng.choice(SAMPLE_ADDRESSES),
        )


__all__ = (
    "SAMPLE_NAMES",
    "SAMPLE_EMAILS",
    "SAMPLE_ADDRESSES",
    "TEST_CARD_NUMBER",
    "SampleCustomer",
)
