"""Typed GraphQL query builder for the AniList catalog.

Every AniList operation is one ``GraphQLQuery``: a root field, a selection
set, the arguments bound to variables and the arguments fixed as literals.
Selection sets are shared so that near-identical queries cannot drift apart.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple

TITLE = "title { romaji english native }"
PAGE_INFO = "pageInfo { total currentPage lastPage hasNextPage perPage }"

MEDIA_CORE = f"""
id idMal {TITLE}
description coverImage {{ large medium }} bannerImage
episodes status averageScore popularity favourites synonyms
seasonYear season genres studios {{ nodes {{ name }} }} format
"""

MEDIA_FULL = MEDIA_CORE + """
trending tags { name } source duration
startDate { year month day } endDate { year month day }
"""

RELATIONS = """
relations {
  edges {
    relationType
    node { id title { english romaji native } coverImage { large medium } episodes season seasonYear format duration }
  }
}
"""

RECOMMENDATIONS = """
recommendations {
  nodes { mediaRecommendation { id title { english romaji native } coverImage { large medium } averageScore } }
}
"""

MEDIA_DETAIL = MEDIA_FULL + RELATIONS + RECOMMENDATIONS

SCHEDULE = f"id episode airingAt media {{ {MEDIA_CORE} }}"


@dataclass(frozen=True)
class GraphQLQuery:
    """A single AniList query.

    ``variables`` maps argument name to GraphQL type and is bound to a
    same-named ``$variable``; ``literals`` maps argument name to a literal
    GraphQL value. ``paged`` wraps the root field in ``Page`` with page info.
    """

    name: str
    root: str
    selection: str
    variables: Dict[str, str] = field(default_factory=dict)
    literals: Dict[str, str] = field(default_factory=dict)
    paged: bool = True

    def declared(self) -> Tuple[Tuple[str, str], ...]:
        decl = dict(self.variables)
        if self.paged:
            decl = {"page": "Int", "perPage": "Int", **decl}
        return tuple(decl.items())

    def render(self) -> str:
        declared = self.declared()
        header = f"query {self.name}"
        if declared:
            header += "(" + ", ".join(f"${k}: {t}" for k, t in declared) + ")"

        args = [f"{k}: {v}" for k, v in self.literals.items()]
        args += [f"{k}: ${k}" for k in self.variables]
        call = self.root + (f"({', '.join(args)})" if args else "")
        body = f"{call} {{ {' '.join(self.selection.split())} }}"

        if self.paged:
            body = f"Page(page: $page, perPage: $perPage) {{ {PAGE_INFO} {body} }}"
        return f"{header} {{ {body} }}"


TOP_ANIME = GraphQLQuery(
    name="TopAnime",
    root="media",
    selection=MEDIA_FULL,
    variables={"sort": "[MediaSort]", "status": "MediaStatus"},
    literals={"type": "ANIME"},
)

SEARCH_ANIME = GraphQLQuery(
    name="SearchAnime",
    root="media",
    selection=MEDIA_CORE,
    variables={"search": "String"},
    literals={"type": "ANIME", "sort": "POPULARITY_DESC"},
)

ANIME_BY_IDS = GraphQLQuery(
    name="AnimeByIds",
    root="media",
    selection=MEDIA_CORE,
    variables={"id_in": "[Int]"},
    literals={"type": "ANIME"},
)

ANIME_DETAIL = GraphQLQuery(
    name="AnimeDetail",
    root="Media",
    selection=MEDIA_DETAIL,
    variables={"id": "Int"},
    literals={"type": "ANIME"},
    paged=False,
)

AIRING_SCHEDULE = GraphQLQuery(
    name="AiringSchedule",
    root="airingSchedules",
    selection=SCHEDULE,
    literals={"notYetAired": "false", "sort": "TIME_DESC"},
)

AIRING_WINDOW = GraphQLQuery(
    name="AiringWindow",
    root="airingSchedules",
    selection=SCHEDULE,
    variables={"airingAt_greater": "Int", "airingAt_lesser": "Int"},
    literals={"sort": "[TIME_DESC]"},
)
