# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Record schema for statuses (tweets) and users.

Plain dataclasses decoded from the wire JSON. Field types are checked while
decoding: a string field holding a number (or any other mismatch) raises
RecordError so the stream loop can report the record as malformed and carry
on with the next one. Absent and null fields take their defaults.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Type, TypeVar

from .timefmt import parse_twitter_time

T = TypeVar("T")


class RecordError(ValueError):
    """A decoded JSON value does not fit the record schema."""


# =============================================================================
# FIELD HELPERS
# =============================================================================


def _typed(data: Mapping[str, Any], key: str, kind: type, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    # bool is an int subclass; never accept it for counts and vice versa
    if isinstance(value, bool) and kind is not bool:
        ok = False
    else:
        ok = isinstance(value, kind)
    if not ok:
        raise RecordError(
            f"cannot decode {type(value).__name__} {value!r} into field "
            f"{key!r} of type {kind.__name__}"
        )
    return value


def _str(data: Mapping[str, Any], key: str) -> str:
    return _typed(data, key, str, "")


def _bool(data: Mapping[str, Any], key: str) -> bool:
    return _typed(data, key, bool, False)


def _int(data: Mapping[str, Any], key: str) -> int:
    return _typed(data, key, int, 0)


def _dict(data: Mapping[str, Any], key: str) -> Dict[str, Any]:
    return _typed(data, key, dict, {})


def _list(data: Mapping[str, Any], key: str) -> List[Any]:
    return _typed(data, key, list, [])


def _time(data: Mapping[str, Any], key: str) -> Optional[datetime]:
    value = _typed(data, key, str, None)
    if value is None:
        return None
    try:
        return parse_twitter_time(value)
    except ValueError as e:
        raise RecordError(f"field {key!r}: {e}") from e


def _indices(data: Mapping[str, Any]) -> List[int]:
    indices = _list(data, "indices")
    for index in indices:
        if isinstance(index, bool) or not isinstance(index, int):
            raise RecordError(f"cannot decode {index!r} into field 'indices'")
    return indices


def _object(data: Mapping[str, Any], key: str, decode: Callable[[Any], T]) -> T:
    return decode(_dict(data, key))


def _objects(data: Mapping[str, Any], key: str, decode: Callable[[Any], T]) -> List[T]:
    items = _list(data, key)
    return [decode(item) for item in items]


def _require_object(cls: Type, data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise RecordError(
            f"cannot decode {type(data).__name__} into {cls.__name__}"
        )
    return data


# =============================================================================
# ENTITIES
# =============================================================================


@dataclass
class TwitterCoordinate:
    type: str = ""
    coordinates: List[Any] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "TwitterCoordinate":
        data = _require_object(cls, data)
        return cls(type=_str(data, "type"), coordinates=_list(data, "coordinates"))


@dataclass
class TwitterPlace:
    id: str = ""
    url: str = ""
    place_type: str = ""
    name: str = ""
    full_name: str = ""
    country_code: str = ""
    country: str = ""
    bounding_box: TwitterCoordinate = field(default_factory=TwitterCoordinate)
    contained_within: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "TwitterPlace":
        data = _require_object(cls, data)
        return cls(
            id=_str(data, "id"),
            url=_str(data, "url"),
            place_type=_str(data, "place_type"),
            name=_str(data, "name"),
            full_name=_str(data, "full_name"),
            country_code=_str(data, "country_code"),
            country=_str(data, "country"),
            bounding_box=_object(data, "bounding_box", TwitterCoordinate.from_dict),
            contained_within=_dict(data, "contained_within"),
        )


@dataclass
class TweetHashTag:
    text: str = ""
    indices: List[int] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "TweetHashTag":
        data = _require_object(cls, data)
        return cls(text=_str(data, "text"), indices=_indices(data))


@dataclass
class TweetMedia:
    id: str = ""
    type: str = ""
    url: str = ""
    display_url: str = ""
    expanded_url: str = ""
    media_url: str = ""
    media_url_https: str = ""
    # https://dev.twitter.com/docs/platform-objects/entities#obj-sizes
    sizes: Dict[str, Any] = field(default_factory=dict)
    indices: List[int] = field(default_factory=list)
    source_status_id: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "TweetMedia":
        data = _require_object(cls, data)
        return cls(
            id=_str(data, "id_str"),
            type=_str(data, "type"),
            url=_str(data, "url"),
            display_url=_str(data, "display_url"),
            expanded_url=_str(data, "expanded_url"),
            media_url=_str(data, "media_url"),
            media_url_https=_str(data, "media_url_https"),
            sizes=_dict(data, "sizes"),
            indices=_indices(data),
            source_status_id=_str(data, "source_status_id_str"),
        )


@dataclass
class TweetUrl:
    url: str = ""
    display_url: str = ""
    expanded_url: str = ""
    indices: List[int] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "TweetUrl":
        data = _require_object(cls, data)
        return cls(
            url=_str(data, "url"),
            display_url=_str(data, "display_url"),
            expanded_url=_str(data, "expanded_url"),
            indices=_indices(data),
        )


@dataclass
class TweetUserMention:
    id: str = ""
    name: str = ""
    screen_name: str = ""
    indices: List[int] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "TweetUserMention":
        data = _require_object(cls, data)
        return cls(
            id=_str(data, "id_str"),
            name=_str(data, "name"),
            screen_name=_str(data, "screen_name"),
            indices=_indices(data),
        )


@dataclass
class TwitterEntity:
    hashtags: List[TweetHashTag] = field(default_factory=list)
    media: List[TweetMedia] = field(default_factory=list)
    urls: List[TweetUrl] = field(default_factory=list)
    user_mentions: List[TweetUserMention] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "TwitterEntity":
        data = _require_object(cls, data)
        return cls(
            hashtags=_objects(data, "hashtags", TweetHashTag.from_dict),
            media=_objects(data, "media", TweetMedia.from_dict),
            urls=_objects(data, "urls", TweetUrl.from_dict),
            user_mentions=_objects(data, "user_mentions", TweetUserMention.from_dict),
        )


# =============================================================================
# USERS AND STATUSES
# =============================================================================


@dataclass
class TwitterUser:
    id: str = ""
    name: str = ""
    screen_name: str = ""
    created_at: Optional[datetime] = None
    location: str = ""
    url: str = ""
    description: str = ""
    protected: bool = False
    followers_count: int = 0
    friends_count: int = 0
    listed_count: int = 0
    favourites_count: int = 0
    statuses_count: int = 0
    utc_offset: int = 0
    time_zone: str = ""
    geo_enabled: bool = False
    verified: bool = False
    lang: str = ""
    contributors_enabled: bool = False
    is_translator: bool = False
    is_translation_enabled: bool = False
    follow_request_sent: bool = False
    profile_background_color: str = ""
    profile_background_image_url: str = ""
    profile_background_image_url_https: str = ""
    profile_background_tile: bool = False
    profile_image_url: str = ""
    profile_image_url_https: str = ""
    profile_link_color: str = ""
    profile_sidebar_border_color: str = ""
    profile_sidebar_fill_color: str = ""
    profile_text_color: str = ""
    profile_use_background_image: bool = False
    default_profile: bool = False
    default_profile_image: bool = False
    status: Dict[str, Any] = field(default_factory=dict)

    _STR_FIELDS = (
        "name", "screen_name", "location", "url", "description", "time_zone",
        "lang", "profile_background_color", "profile_background_image_url",
        "profile_background_image_url_https", "profile_image_url",
        "profile_image_url_https", "profile_link_color",
        "profile_sidebar_border_color", "profile_sidebar_fill_color",
        "profile_text_color",
    )
    _BOOL_FIELDS = (
        "protected", "geo_enabled", "verified", "contributors_enabled",
        "is_translator", "is_translation_enabled", "follow_request_sent",
        "profile_background_tile", "profile_use_background_image",
        "default_profile", "default_profile_image",
    )
    _INT_FIELDS = (
        "followers_count", "friends_count", "listed_count", "favourites_count",
        "statuses_count", "utc_offset",
    )

    @classmethod
    def from_dict(cls, data: Any) -> "TwitterUser":
        data = _require_object(cls, data)
        values: Dict[str, Any] = {
            "id": _str(data, "id_str"),
            "created_at": _time(data, "created_at"),
            "status": _dict(data, "status"),
        }
        values.update({name: _str(data, name) for name in cls._STR_FIELDS})
        values.update({name: _bool(data, name) for name in cls._BOOL_FIELDS})
        values.update({name: _int(data, name) for name in cls._INT_FIELDS})
        return cls(**values)

    @classmethod
    def list_from(cls, data: Any) -> List["TwitterUser"]:
        """Decode a users/lookup response (a JSON array of users)."""
        if not isinstance(data, list):
            raise RecordError(f"expected a list of users, got {type(data).__name__}")
        return [cls.from_dict(item) for item in data]


@dataclass
class TwitterStatus:
    id: str = ""
    in_reply_to_status_id: str = ""
    in_reply_to_user_id: str = ""
    in_reply_to_screen_name: str = ""
    created_at: Optional[datetime] = None
    text: str = ""
    user: TwitterUser = field(default_factory=TwitterUser)
    source: str = ""
    truncated: bool = False
    favorited: bool = False
    retweeted: bool = False
    retweeted_status: Dict[str, Any] = field(default_factory=dict)
    possibly_sensitive: bool = False
    lang: str = ""
    retweet_count: int = 0
    favorite_count: int = 0
    coordinates: TwitterCoordinate = field(default_factory=TwitterCoordinate)
    place: TwitterPlace = field(default_factory=TwitterPlace)
    entities: TwitterEntity = field(default_factory=TwitterEntity)

    @classmethod
    def from_dict(cls, data: Any) -> "TwitterStatus":
        data = _require_object(cls, data)
        user_key = "user" if "user" in data else "User"
        return cls(
            id=_str(data, "id_str"),
            in_reply_to_status_id=_str(data, "in_reply_to_status_id_str"),
            in_reply_to_user_id=_str(data, "in_reply_to_user_id_str"),
            in_reply_to_screen_name=_str(data, "in_reply_to_screen_name"),
            created_at=_time(data, "created_at"),
            text=_str(data, "text"),
            user=_object(data, user_key, TwitterUser.from_dict),
            source=_str(data, "source"),
            truncated=_bool(data, "truncated"),
            favorited=_bool(data, "favorited"),
            retweeted=_bool(data, "retweeted"),
            retweeted_status=_dict(data, "retweeted_status"),
            possibly_sensitive=_bool(data, "possibly_sensitive"),
            lang=_str(data, "lang"),
            retweet_count=_int(data, "retweet_count"),
            favorite_count=_int(data, "favorite_count"),
            coordinates=_object(data, "coordinates", TwitterCoordinate.from_dict),
            place=_object(data, "place", TwitterPlace.from_dict),
            entities=_object(data, "entities", TwitterEntity.from_dict),
        )


__all__ = [
    "RecordError",
    "TwitterStatus",
    "TwitterUser",
    "TwitterCoordinate",
    "TwitterPlace",
    "TwitterEntity",
    "TweetHashTag",
    "TweetMedia",
    "TweetUrl",
    "TweetUserMention",
]
