"""Strongly typed identifiers for invite engine entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

InviteId = NewType("InviteId", UUID)
LinkId = NewType("LinkId", UUID)
PropertyId = NewType("PropertyId", UUID)
UserId = NewType("UserId", UUID)
