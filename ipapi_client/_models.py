# -*- coding: utf-8 -*-

from typing import Optional, List

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from ipapi_client import _constants as constants


class LocationData(BaseModel):
    """The geo-location data of a query

    Every field is ``None`` if it was not requested or the service has not returned it.
    The field names follow the service names in snake case, ``as`` field is ``as_``.
    """

    model_config = ConfigDict(populate_by_name=True, extra='ignore', frozen=True)

    status: Optional[str] = None
    message: Optional[str] = None

    continent: Optional[str] = None
    continent_code: Optional[str] = Field(default=None, alias='continentCode')
    country: Optional[str] = None
    country_code: Optional[str] = Field(default=None, alias='countryCode')
    region: Optional[str] = None
    region_name: Optional[str] = Field(default=None, alias='regionName')
    city: Optional[str] = None
    district: Optional[str] = None
    zip: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None
    timezone: Optional[str] = None
    offset: Optional[int] = None
    currency: Optional[str] = None
    isp: Optional[str] = None
    org: Optional[str] = None
    as_: Optional[str] = Field(default=None, alias='as')
    asname: Optional[str] = None
    reverse: Optional[str] = None
    mobile: Optional[bool] = None
    proxy: Optional[bool] = None
    hosting: Optional[bool] = None
    query: Optional[str] = None

    @property
    def failed(self) -> bool:
        """Returns True if the service has reported a failure for the query
        """
        return self.status == constants.FAIL_STATUS or self.message is not None

    def to_dict(self):
        """Returns the dict with the service field names and only present values
        """
        return self.model_dump(by_alias=True, exclude_none=True)


location_list_adapter = TypeAdapter(List[LocationData])
