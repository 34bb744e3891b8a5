"""
services/people.py

Клиент внешнего сервиса people: по серии и номеру паспорта
возвращает имя, фамилию, отчество и адрес.
"""
import logging
from typing import Optional

import httpx
from pydantic import BaseModel, ValidationError

from utils.exceptions import PeopleServiceError, PersonNotFoundError
from utils.passport import format_passport

logger = logging.getLogger("time_tracker.people")


class Person(BaseModel):
    name: str
    surname: str
    patronymic: Optional[str] = None
    address: str


class PeopleClient:
    """
    Async client for GET /info?passportSerie=&passportNumber=
    """

    def __init__(self, base_url: str, timeout: float = 5.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def lookup(self, passport_serie: int, passport_number: int, log: logging.LoggerAdapter = None) -> Person:
        """
        Fetches person info from the people service.

        Raises:
            PersonNotFoundError: the service does not know this passport
            PeopleServiceError: transport failure or unusable response
        """
        log = log or logger
        passport = format_passport(passport_serie, passport_number)
        log.debug(f"People lookup {passport} at {self.base_url}")

        try:
            async with httpx.AsyncClient(base_url=self.base_url, timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(
                    "/info",
                    params={"passportSerie": passport_serie, "passportNumber": passport_number},
                )
        except httpx.HTTPError as e:
            log.error(f"People service request failed: {e!r}")
            raise PeopleServiceError("People service is unavailable") from e

        if response.status_code == 404:
            raise PersonNotFoundError(f"Person with passport {passport} not found")
        if response.status_code != 200:
            log.error(f"People service answered {response.status_code}: {response.text[:200]}")
            raise PeopleServiceError(f"People service answered {response.status_code}")

        try:
            person = Person.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            log.error(f"Invalid response from people service: {e}")
            raise PeopleServiceError("Invalid response from people service") from e

        log.debug(f"People lookup {passport}: {person.surname} {person.name}")
        return person
