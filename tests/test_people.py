import httpx
import pytest

from services.people import PeopleClient
from utils.exceptions import PeopleServiceError, PersonNotFoundError


def client_for(handler) -> PeopleClient:
    return PeopleClient("http://people.test", timeout=1.0, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_lookup_person():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={
            "name": "Иван",
            "surname": "Иванов",
            "patronymic": "Иванович",
            "address": "г. Москва, ул. Тверская, д. 5",
        })

    person = await client_for(handler).lookup(4321, 123456)

    assert seen == {"path": "/info", "params": {"passportSerie": "4321", "passportNumber": "123456"}}
    assert person.surname == "Иванов"
    assert person.patronymic == "Иванович"


@pytest.mark.asyncio
async def test_lookup_without_patronymic():
    def handler(request):
        return httpx.Response(200, json={"name": "Олег", "surname": "Новиков", "address": "Ростов"})

    person = await client_for(handler).lookup(1234, 567890)

    assert person.patronymic is None


@pytest.mark.asyncio
async def test_person_not_found():
    def handler(request):
        return httpx.Response(404, json={"message": "Person not found"})

    with pytest.raises(PersonNotFoundError):
        await client_for(handler).lookup(1111, 111111)


@pytest.mark.asyncio
@pytest.mark.parametrize("response", [
    httpx.Response(500, json={"message": "Internal server error"}),
    httpx.Response(200, text="not json"),
    httpx.Response(200, json={"name": "Без фамилии"}),
])
async def test_unusable_response(response):
    with pytest.raises(PeopleServiceError):
        await client_for(lambda request: response).lookup(4321, 123456)


@pytest.mark.asyncio
async def test_service_unavailable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(PeopleServiceError):
        await client_for(handler).lookup(4321, 123456)
