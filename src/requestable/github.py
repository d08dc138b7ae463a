"""Descriptors for a few GitHub REST endpoints.

Every endpoint is a configuration of the one generic
:class:`~requestable.descriptor.Descriptor`.
None of them carry credentials; add them with
:func:`~requestable.http.bearer_auth`:

>>> gist = create_gist({'hello.txt': 'hi'}, description='greeting')
>>> authed = bearer_auth(settings.github_token)(gist)
"""
import typing as t
from dataclasses import dataclass
from functools import partial
from urllib.parse import quote, urlencode

from .descriptor import GET, POST, json_decoder

__all__ = [
    "Account",
    "RepoSummary",
    "SearchResult",
    "Gist",
    "user",
    "search_repos",
    "create_gist",
]

API_PREFIX = "https://api.github.com/"
HEADERS = {"Accept": "application/vnd.github.v3+json"}

dclass = partial(dataclass, frozen=True)


def _get(data, key, *types):
    """get a required key, checking its type"""
    value = data[key]
    if not isinstance(value, types):
        raise TypeError(
            "{!r} must be {}, got {}".format(
                key,
                " or ".join(typ.__name__ for typ in types),
                type(value).__name__,
            )
        )
    return value


_optional_str = (str, type(None))


@dclass
class Account:
    name: t.Optional[str]
    bio: t.Optional[str]

    @classmethod
    def from_json(cls, data):
        return cls(
            name=_get(data, "name", *_optional_str),
            bio=_get(data, "bio", *_optional_str),
        )


@dclass
class RepoSummary:
    id: int
    name: str
    full_name: str
    description: t.Optional[str]
    stargazers_count: int

    @classmethod
    def from_json(cls, data):
        return cls(
            id=_get(data, "id", int),
            name=_get(data, "name", str),
            full_name=_get(data, "full_name", str),
            description=_get(data, "description", *_optional_str),
            stargazers_count=_get(data, "stargazers_count", int),
        )


@dclass
class SearchResult:
    """one page of repository search results"""

    total_count: int
    incomplete_results: bool
    items: t.List[RepoSummary]

    @classmethod
    def from_json(cls, data):
        return cls(
            total_count=_get(data, "total_count", int),
            incomplete_results=_get(data, "incomplete_results", bool),
            items=[
                RepoSummary.from_json(item)
                for item in _get(data, "items", list)
            ],
        )


@dclass
class Gist:
    id: str
    html_url: str
    description: t.Optional[str]

    @classmethod
    def from_json(cls, data):
        return cls(
            id=_get(data, "id", str),
            html_url=_get(data, "html_url", str),
            description=_get(data, "description", *_optional_str),
        )


def user(username, prefix=API_PREFIX):
    """retrieve a user account by username

    Returns
    -------
    Descriptor[Account]
    """
    return GET(
        prefix + "users/" + quote(username, safe=""),
        headers=HEADERS,
        decode=json_decoder(Account.from_json),
    )


def search_repos(query, sort=None, order=None, prefix=API_PREFIX):
    """search repositories

    Parameters
    ----------
    query: str
        the search terms and qualifiers, e.g. ``"snug language:python"``
    sort: str or None
        ``"stars"``, ``"forks"``, ``"help-wanted-issues"`` or ``"updated"``
    order: str or None
        ``"asc"`` or ``"desc"``

    Returns
    -------
    Descriptor[SearchResult]
    """
    params = {"q": query, "sort": sort, "order": order}
    return GET(
        prefix
        + "search/repositories?"
        + urlencode({k: v for k, v in params.items() if v is not None}),
        headers=HEADERS,
        decode=json_decoder(SearchResult.from_json),
    )


def create_gist(files, description=None, public=False, prefix=API_PREFIX):
    """create a gist. Requires authentication.

    Parameters
    ----------
    files: ~typing.Mapping[str, str]
        file names and their contents
    description: str or None
        the gist description
    public: bool
        whether the gist is public

    Returns
    -------
    Descriptor[Gist]
    """
    body = {
        "public": public,
        "files": {name: {"content": text} for name, text in files.items()},
    }
    if description is not None:
        body["description"] = description
    return POST(
        prefix + "gists",
        headers=dict(HEADERS, **{"Content-Type": "application/json"}),
        body=body,
        decode=json_decoder(Gist.from_json),
    )
