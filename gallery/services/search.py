"""
Free-text photo search restricted to what the viewer may see.
"""
import logging
from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Set

from sqlalchemy import Select, String, cast, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement

from gallery.core.snapshot import ConfigSnapshot
from gallery.core.viewer import ViewerContext
from gallery.core.visibility import photo_visibility_filter
from gallery.models.photo import Photo

logger = logging.getLogger("gallery.search")

# Fields a term may match in; taken_at is matched on its text form
SEARCH_FIELDS = ("title", "description", "tags", "location", "model", "taken_at")

# Text form of taken_at, to the second
TAKEN_AT_FORMAT = "%Y-%m-%d %H:%M:%S"


class taken_at_text(FunctionElement):
    """``taken_at`` rendered as TAKEN_AT_FORMAT by the database."""
    type = String()
    inherit_cache = True
    name = "taken_at_text"


@compiles(taken_at_text)
def _taken_at_text_default(element, compiler, **kw):
    return compiler.process(cast(element.clauses.clauses[0], String), **kw)


@compiles(taken_at_text, "sqlite")
def _taken_at_text_sqlite(element, compiler, **kw):
    return compiler.process(func.strftime(TAKEN_AT_FORMAT, element.clauses.clauses[0]), **kw)


@compiles(taken_at_text, "postgresql")
def _taken_at_text_postgresql(element, compiler, **kw):
    return compiler.process(
        func.to_char(element.clauses.clauses[0], "YYYY-MM-DD HH24:MI:SS"), **kw
    )


@compiles(taken_at_text, "mysql")
def _taken_at_text_mysql(element, compiler, **kw):
    return compiler.process(
        func.date_format(element.clauses.clauses[0], "%Y-%m-%d %H:%i:%s"), **kw
    )


def split_terms(query: Optional[str]) -> List[str]:
    """Split a raw query on whitespace, dropping empty parts."""
    if not query:
        return []
    return query.split()


def _searchable_columns() -> list:
    return [
        Photo.title,
        Photo.description,
        Photo.tags,
        Photo.location,
        Photo.model,
        taken_at_text(Photo.taken_at),
    ]


def _field_text(value) -> str:
    if isinstance(value, datetime):
        return value.strftime(TAKEN_AT_FORMAT)
    return str(value)


def photo_matches(photo: Photo, terms: Iterable[str]) -> bool:
    """
    True when every term occurs, case-insensitively, in at least one
    searchable field of ``photo``.
    """
    haystacks = [
        _field_text(value).lower()
        for value in (getattr(photo, field) for field in SEARCH_FIELDS)
        if value is not None
    ]
    return all(
        any(term.lower() in haystack for haystack in haystacks)
        for term in terms
    )


class SearchEngine:
    """
    Photo search.
    Candidates are the photos in visible albums plus unsorted/public photos;
    each term narrows them further. No ranking.
    """
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    def build_query(
        self,
        terms: Sequence[str],
        viewer: ViewerContext,
        config: ConfigSnapshot,
    ) -> Select:
        """
        Build the search statement.
        
        Terms are expected to be sanitized by the caller; they are used as
        LIKE fragments unchanged.
        """
        query = select(Photo).where(photo_visibility_filter(viewer, config))
        
        for term in terms:
            pattern = f"%{term}%"
            query = query.where(
                or_(*(column.ilike(pattern) for column in _searchable_columns()))
            )
        
        return query
    
    async def search(
        self,
        terms: Sequence[str],
        viewer: ViewerContext,
        config: ConfigSnapshot,
    ) -> Set[Photo]:
        """
        Search visible photos.
        
        Args:
            terms: Terms that must all match; empty returns every visible photo
            viewer: Requesting identity
            config: Settings snapshot for this request
            
        Returns:
            Unordered set of matching photos
        """
        result = await self.db.execute(self.build_query(terms, viewer, config))
        photos = set(result.scalars().all())
        logger.info(
            "Photo search",
            extra={
                "event": "search",
                "role": viewer.role.value,
                "terms": len(terms),
                "results": len(photos),
            },
        )
        return photos
