from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Tuple

from .exceptions import RoleNotFound


@dataclass(frozen=True)
class Role:
    id: str
    name: str
    description: str
    seed_questions: Tuple[str, ...]
    fallback_questions: Tuple[str, ...]
    focus_areas: Tuple[str, ...]


class RoleCatalog:
    """Read-only lookup of the roles a candidate can practice for."""

    def __init__(self, roles: Iterable[Role]):
        table: Dict[str, Role] = {}
        for role in roles:
            if role.id in table:
                raise ValueError(f"Duplicate role id {role.id!r}")
            if not role.seed_questions:
                raise ValueError(f"Role {role.id!r} needs at least one seed question")
            table[role.id] = role
        self._roles: Mapping[str, Role] = MappingProxyType(table)

    def get(self, role_id: str) -> Role:
        try:
            return self._roles[role_id]
        except KeyError:
            raise RoleNotFound(role_id) from None

    def list(self) -> List[Role]:
        return list(self._roles.values())

    def __contains__(self, role_id: object) -> bool:
        return role_id in self._roles

    def __iter__(self) -> Iterator[str]:
        return iter(self._roles)

    def __len__(self) -> int:
        return len(self._roles)


DEFAULT_ROLES: Tuple[Role, ...] = (
    Role(
        id="sales",
        name="Sales Representative",
        description="Customer-facing sales position",
        seed_questions=(
            "Tell me about yourself and your sales experience.",
            "How do you handle rejection from potential customers?",
            "Describe a time when you exceeded your sales targets.",
            "How would you approach a cold call to a potential client?",
            "What motivates you in a sales role?",
        ),
        fallback_questions=(
            "How do you qualify leads before investing time in them?",
            "What's your approach to building long-term customer relationships?",
            "How do you handle price objections?",
            "Tell me about your experience with CRM systems.",
            "How do you prepare for important sales presentations?",
        ),
        focus_areas=("persuasion", "resilience", "communication", "goal orientation"),
    ),
    Role(
        id="engineer",
        name="Software Engineer",
        description="Technical development position",
        seed_questions=(
            "Tell me about your background in software engineering.",
            "How do you approach debugging a complex issue in production?",
            "Describe a challenging technical problem you solved recently.",
            "How do you stay current with new technologies and best practices?",
            "Tell me about a time you had to make a trade-off between speed and quality.",
        ),
        fallback_questions=(
            "How do you approach code reviews?",
            "What's your experience with testing and quality assurance?",
            "How do you handle technical debt in a project?",
            "Tell me about your experience working in an agile environment.",
            "How do you approach system design for scalability?",
        ),
        focus_areas=("problem-solving", "technical knowledge", "collaboration", "continuous learning"),
    ),
    Role(
        id="retail",
        name="Retail Associate",
        description="Customer service and sales position",
        seed_questions=(
            "Tell me about your experience in customer service or retail.",
            "How would you handle an upset customer?",
            "Describe a time when you went above and beyond for a customer.",
            "How do you prioritize tasks during a busy shift?",
            "What does excellent customer service mean to you?",
        ),
        fallback_questions=(
            "How do you handle multiple customers waiting for assistance?",
            "Tell me about your experience with cash handling or POS systems.",
            "How do you approach upselling or cross-selling?",
            "What would you do if you noticed a coworker providing poor service?",
            "How do you maintain energy and positivity during long shifts?",
        ),
        focus_areas=("customer service", "patience", "multitasking", "teamwork"),
    ),
)


def default_catalog() -> RoleCatalog:
    return RoleCatalog(DEFAULT_ROLES)
