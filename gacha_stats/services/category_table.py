"""Per-business category tables: pull-type codes, merges and rarity tiers."""

from dataclasses import dataclass, field

from gacha_stats.schemas.prettized import Category
from gacha_stats.schemas.record import Business

# Pull-type codes that are referenced outside their own table entry
GENSHIN_IMPACT_CHARACTER = 301
GENSHIN_IMPACT_CHARACTER2 = 400
ZENLESS_ZONE_ZERO_BANGBOO = 5
MILIASTRA_WONDERLAND_PERMANENT_ODE = 1000
MILIASTRA_WONDERLAND_EVENT_ODE = 2000
MILIASTRA_WONDERLAND_EVENT_ODES = (20011, 20021, 20012, 20022)


@dataclass(frozen=True)
class CategoryEntry:
    """One category and the pull-type codes folded into it.

    The first code is the representative one reported on the group.
    """

    category: Category
    pull_type_codes: tuple[int, ...]

    def __post_init__(self):
        if not self.pull_type_codes:
            raise ValueError(f"{self.category.value}: at least one pull-type code is required")

    @property
    def pull_type_code(self) -> int:
        return self.pull_type_codes[0]

    @property
    def is_merged(self) -> bool:
        return len(self.pull_type_codes) > 1


@dataclass(frozen=True)
class RarityTiers:
    """Which rarity codes count as low, mid and top tier."""

    low: frozenset[int]
    mid: frozenset[int]
    top: frozenset[int]

    def is_low(self, rarity: int) -> bool:
        return rarity in self.low

    def is_mid(self, rarity: int) -> bool:
        return rarity in self.mid

    def is_top(self, rarity: int) -> bool:
        return rarity in self.top


@dataclass(frozen=True)
class CategoryTable:
    """Static categorization rules for one business.

    Attributes:
        entries: Categories in report order, each with its source codes.
        rarity: Rarity tier sets.
        aggregated: Whether an account-wide aggregate is produced at all.
        aggregate_excludes: Categories left out of the aggregate. Their
            records are removed from the aggregate total as well.
        top_resets_mid_pity: Whether a top-tier pull also clears the mid-tier
            pity counter.
    """

    entries: tuple[CategoryEntry, ...]
    rarity: RarityTiers
    aggregated: bool = True
    aggregate_excludes: frozenset[Category] = field(default_factory=frozenset)
    top_resets_mid_pity: bool = False

    def __post_init__(self):
        seen_codes: dict[int, Category] = {}
        seen_categories: set[Category] = set()
        for entry in self.entries:
            if entry.category in seen_categories:
                raise ValueError(f"Duplicate category: {entry.category.value}")
            seen_categories.add(entry.category)
            for code in entry.pull_type_codes:
                if code in seen_codes:
                    raise ValueError(
                        f"Pull-type code {code} maps to both "
                        f"{seen_codes[code].value} and {entry.category.value}"
                    )
                seen_codes[code] = entry.category

    @property
    def pull_type_categories(self) -> dict[int, Category]:
        return {
            code: entry.category
            for entry in self.entries
            for code in entry.pull_type_codes
        }

    def category_of(self, pull_type_code: int) -> Category | None:
        return self.pull_type_categories.get(pull_type_code)

    def excluded_pull_type_codes(self) -> frozenset[int]:
        return frozenset(
            code
            for entry in self.entries
            if entry.category in self.aggregate_excludes
            for code in entry.pull_type_codes
        )


_STANDARD_RARITY = RarityTiers(low=frozenset({3}), mid=frozenset({4}), top=frozenset({5}))
_ZENLESS_RARITY = RarityTiers(low=frozenset({2}), mid=frozenset({3}), top=frozenset({4}))


def category_table(business: Business) -> CategoryTable:
    """Return the built-in category table for a business."""
    match business:
        case Business.GENSHIN_IMPACT:
            return CategoryTable(
                entries=(
                    CategoryEntry(Category.BEGINNER, (100,)),
                    CategoryEntry(Category.PERMANENT, (200,)),
                    CategoryEntry(
                        Category.CHARACTER,
                        (GENSHIN_IMPACT_CHARACTER, GENSHIN_IMPACT_CHARACTER2),
                    ),
                    CategoryEntry(Category.WEAPON, (302,)),
                    CategoryEntry(Category.CHRONICLED, (500,)),
                ),
                rarity=_STANDARD_RARITY,
            )
        case Business.HONKAI_STAR_RAIL:
            return CategoryTable(
                entries=(
                    CategoryEntry(Category.BEGINNER, (2,)),
                    CategoryEntry(Category.PERMANENT, (1,)),
                    CategoryEntry(Category.CHARACTER, (11,)),
                    CategoryEntry(Category.WEAPON, (12,)),
                    CategoryEntry(Category.COLLABORATION_CHARACTER, (21,)),
                    CategoryEntry(Category.COLLABORATION_WEAPON, (22,)),
                ),
                rarity=_STANDARD_RARITY,
            )
        case Business.ZENLESS_ZONE_ZERO:
            # Bangboo is a separate banner and never counts towards the aggregate.
            # An S-rank pull also resets the A-rank counter.
            return CategoryTable(
                entries=(
                    CategoryEntry(Category.PERMANENT, (1,)),
                    CategoryEntry(Category.CHARACTER, (2,)),
                    CategoryEntry(Category.WEAPON, (3,)),
                    CategoryEntry(Category.BANGBOO, (ZENLESS_ZONE_ZERO_BANGBOO,)),
                ),
                rarity=_ZENLESS_RARITY,
                aggregate_excludes=frozenset({Category.BANGBOO}),
                top_resets_mid_pity=True,
            )
        case Business.MILIASTRA_WONDERLAND:
            return CategoryTable(
                entries=(
                    CategoryEntry(Category.PERMANENT_ODE, (MILIASTRA_WONDERLAND_PERMANENT_ODE,)),
                    CategoryEntry(
                        Category.EVENT_ODE,
                        (MILIASTRA_WONDERLAND_EVENT_ODE, *MILIASTRA_WONDERLAND_EVENT_ODES),
                    ),
                ),
                rarity=_STANDARD_RARITY,
                aggregated=False,
            )
    raise ValueError(f"Unknown business: {business!r}")


def max_pity(category: Category) -> int:
    """Hard pity of the top tier for a category, 0 when unknown."""
    match category:
        case (
            Category.CHARACTER
            | Category.PERMANENT
            | Category.CHRONICLED
            | Category.COLLABORATION_CHARACTER
        ):
            return 90
        case Category.WEAPON | Category.BANGBOO | Category.COLLABORATION_WEAPON:
            return 80
        case Category.EVENT_ODE:
            return 70
        case Category.BEGINNER:
            return 50
        case _:
            return 0


def pity_progress(category: Category, pity: int) -> int:
    """Progress towards hard pity as an integer percentage (0 - 100)."""
    limit = max_pity(category)
    if limit == 0 or pity == 0:
        return 0
    return min(100, max(0, int(pity / limit * 100 + 0.5)))
