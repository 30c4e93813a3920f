"""
Option models for connections and collection operations.

Every model accepts extra keys, which are handed to the driver untouched.
Operations accept either a model instance or a plain mapping.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 27017

T = TypeVar('T', bound='DriverOptions')


class DriverOptions(BaseModel):
    """Base for option models forwarded as keyword arguments to the driver"""

    model_config = ConfigDict(extra="allow")

    @classmethod
    def coerce(cls: Type[T], options: Union[T, Mapping[str, Any], None]) -> T:
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, BaseModel):
            return cls.model_validate(options.model_dump(exclude_none=True))
        return cls.model_validate(dict(options))

    def to_kwargs(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ConnectionOptions(DriverOptions):
    """Where to connect; unknown keys are MongoClient options"""

    host: Optional[str] = None
    port: Optional[int] = None
    name: Optional[str] = None

    def client_kwargs(self) -> Dict[str, Any]:
        """Options meant for the client, without host/port/name"""
        return self.model_dump(exclude={"host", "port", "name"}, exclude_none=True)


class FindOptions(DriverOptions):
    sort: Union[List[Tuple[str, Any]], Dict[str, Any], None] = None
    skip: Optional[int] = Field(default=None, ge=0)
    # negative limits are passed on, the server closes the cursor after one batch
    limit: Optional[int] = None


class CountOptions(DriverOptions):
    skip: Optional[int] = Field(default=None, ge=0)
    limit: Optional[int] = Field(default=None, gt=0)


class WriteOptions(DriverOptions):
    """Write options; ``w``/``j``/``wtimeout`` build the per call write concern"""

    w: Optional[Union[int, str]] = None
    j: Optional[bool] = None
    wtimeout: Optional[int] = None

    def write_concern_kwargs(self) -> Dict[str, Any]:
        return self.model_dump(include={"w", "j", "wtimeout"}, exclude_none=True)

    def to_kwargs(self) -> Dict[str, Any]:
        return self.model_dump(exclude={"w", "j", "wtimeout"}, exclude_none=True)
