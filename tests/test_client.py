import pathlib
import pickle
import sys
import threading
from urllib.error import URLError

import pytest

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1]))
from kcadmin_cli.client import GroupMembershipClient
from kcadmin_cli.core.errors import HTTPStatusError, RawBodyError
from kcadmin_cli.core.http import Response
from kcadmin_cli.core.session import Session

BASE = "https://sso.example.com"


class FakeTransport:
    """Records requests and answers from a queue of responses or exceptions."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.requests = []
        self._lock = threading.Lock()

    def __call__(self, request):
        with self._lock:
            self.requests.append(request)
            answer = self.answers.pop(0) if len(self.answers) > 1 else self.answers[0]
        if isinstance(answer, BaseException):
            raise answer
        if callable(answer):
            return answer(request)
        return answer


def make_client(*answers):
    transport = FakeTransport(*answers)
    return GroupMembershipClient(Session(BASE + "/", "tok"), transport), transport


def test_find_returns_body_unchanged():
    groups = [{"id": "g1", "name": "grp"}]
    client, transport = make_client(Response(200, groups))
    assert client.find("master", "u1") == [{"id": "g1", "name": "grp"}]
    req = transport.requests[0]
    assert req.method == "GET"
    assert req.url == f"{BASE}/admin/realms/master/users/u1/groups"
    assert req.headers["Authorization"] == "Bearer tok"
    assert req.headers["Accept"] == "application/json"
    assert req.payload is None


def test_find_keeps_server_order():
    groups = [{"id": "z"}, {"id": "a"}, {"id": "m"}]
    client, _ = make_client(Response(200, groups))
    assert [g["id"] for g in client.find("r", "u")] == ["z", "a", "m"]


@pytest.mark.parametrize("status", [201, 204, 401, 404, 500])
def test_find_non_200_raises_status_error(status):
    body = {"error": "nope"}
    client, _ = make_client(Response(status, body))
    with pytest.raises(HTTPStatusError) as exc:
        client.find("master", "u1")
    assert exc.value.status_code == status
    assert exc.value.body == body
    assert exc.value.operation == "find"
    assert not isinstance(exc.value, RawBodyError)


def test_find_query_parameters():
    client, transport = make_client(Response(200, []))
    client.find("master", "u1", first=10, max=5, search="dev", brief=False)
    assert transport.requests[0].url == (
        f"{BASE}/admin/realms/master/users/u1/groups"
        "?first=10&max=5&search=dev&briefRepresentation=false"
    )


def test_find_all_pages_until_short_page():
    pages = {0: [{"id": "a"}, {"id": "b"}], 2: [{"id": "c"}, {"id": "d"}], 4: [{"id": "e"}]}

    def answer(request):
        first = int(request.url.split("first=")[1].split("&")[0])
        return Response(200, pages[first])

    client, transport = make_client(answer)
    result = client.find_all("master", "u1", page_size=2)
    assert [g["id"] for g in result] == ["a", "b", "c", "d", "e"]
    assert len(transport.requests) == 3


def test_count():
    client, transport = make_client(Response(200, {"count": 3}))
    assert client.count("master", "u1") == 3
    assert transport.requests[0].url.endswith("/users/u1/groups/count")


def test_add_204_returns_body():
    client, transport = make_client(Response(204, None))
    assert client.add("master", "u1", "g1") is None
    req = transport.requests[0]
    assert req.method == "PUT"
    assert req.url == f"{BASE}/admin/realms/master/users/u1/groups/g1"
    assert req.headers["Authorization"] == "Bearer tok"


def test_remove_204_uses_delete():
    client, transport = make_client(Response(204, None))
    assert client.remove("master", "u1", "g1") is None
    assert transport.requests[0].method == "DELETE"
    assert transport.requests[0].url == f"{BASE}/admin/realms/master/users/u1/groups/g1"


def test_remove_404_raises_raw_body():
    body = {"error": "User not found"}
    client, _ = make_client(Response(404, body))
    with pytest.raises(RawBodyError) as exc:
        client.remove("master", "u1", "g1")
    assert exc.value.body is body
    assert exc.value.args == (body,)
    assert exc.value.status_code == 404
    assert exc.value.operation == "remove"


def test_add_200_is_not_success():
    client, _ = make_client(Response(200, b"ok"))
    with pytest.raises(RawBodyError) as exc:
        client.add("master", "u1", "g1")
    assert exc.value.body == b"ok"


@pytest.mark.parametrize("op,args", [
    ("find", ("master", "u1")),
    ("add", ("master", "u1", "g1")),
    ("remove", ("master", "u1", "g1")),
])
def test_transport_error_propagates_unchanged(op, args):
    err = URLError("connection refused")
    client, _ = make_client(err)
    with pytest.raises(URLError) as exc:
        getattr(client, op)(*args)
    assert exc.value is err


def test_identifiers_are_path_quoted():
    client, transport = make_client(Response(204, None))
    client.add("my realm", "u/1", "g1")
    assert transport.requests[0].url == f"{BASE}/admin/realms/my%20realm/users/u%2F1/groups/g1"


def test_add_many_collects_errors_in_order():
    def answer(request):
        if request.url.endswith("/bad"):
            return Response(409, {"errorMessage": "conflict"})
        return Response(204, None)

    client, transport = make_client(answer)
    results = client.add_many("master", "u1", ["g1", "bad", "g3"], workers=3, progress=False)
    assert [gid for gid, _ in results] == ["g1", "bad", "g3"]
    assert results[0][1] is None
    assert isinstance(results[1][1], RawBodyError)
    assert results[1][1].status_code == 409
    assert results[2][1] is None
    assert len(transport.requests) == 3
    assert all(r.method == "PUT" for r in transport.requests)


def test_remove_many_uses_delete():
    client, transport = make_client(Response(204, None))
    results = client.remove_many("master", "u1", ["g1", "g2"], progress=False)
    assert results == [("g1", None), ("g2", None)]
    assert {r.method for r in transport.requests} == {"DELETE"}


def test_find_all_stops_when_server_ignores_paging():
    everything = [{"id": "a"}, {"id": "b"}, {"id": "c"}]
    client, transport = make_client(Response(200, everything))
    assert client.find_all("master", "u1", page_size=2) == everything
    assert len(transport.requests) == 1


def test_find_all_stops_on_repeated_page():
    everything = [{"id": "a"}, {"id": "b"}]
    client, transport = make_client(Response(200, everything))
    assert client.find_all("master", "u1", page_size=2) == everything
    assert len(transport.requests) == 2


def test_find_all_raises_status_error_from_later_page():
    def answer(request):
        if "first=0" in request.url:
            return Response(200, [{"id": "a"}, {"id": "b"}])
        return Response(500, {"error": "boom"})

    client, _ = make_client(answer)
    with pytest.raises(HTTPStatusError) as exc:
        client.find_all("master", "u1", page_size=2)
    assert exc.value.status_code == 500
    assert exc.value.operation == "find"


def test_find_sends_empty_search():
    client, transport = make_client(Response(200, []))
    client.find("master", "u1", search="")
    assert transport.requests[0].url.endswith("/users/u1/groups?search=")


def test_count_non_200_raises_status_error():
    client, _ = make_client(Response(403, {"error": "forbidden"}))
    with pytest.raises(HTTPStatusError) as exc:
        client.count("master", "u1")
    assert exc.value.status_code == 403
    assert exc.value.body == {"error": "forbidden"}
    assert exc.value.operation == "count"


def test_remove_many_collects_errors_in_order():
    def answer(request):
        if request.url.endswith("/g2"):
            return Response(404, b"missing")
        return Response(204, None)

    client, transport = make_client(answer)
    results = client.remove_many("master", "u1", ["g1", "g2", "g3"], workers=2, progress=False)
    assert [gid for gid, _ in results] == ["g1", "g2", "g3"]
    assert results[0][1] is None and results[2][1] is None
    err = results[1][1]
    assert isinstance(err, RawBodyError)
    assert err.body == b"missing"
    assert err.operation == "remove"
    assert len(transport.requests) == 3


def test_errors_survive_pickling():
    raw = pickle.loads(pickle.dumps(RawBodyError({"error": "x"}, 409, "add")))
    assert isinstance(raw, RawBodyError)
    assert (raw.body, raw.status_code, raw.operation) == ({"error": "x"}, 409, "add")
    assert raw.args == ({"error": "x"},)

    status = pickle.loads(pickle.dumps(HTTPStatusError(500, b"oops", "find")))
    assert (status.status_code, status.body, status.operation) == (500, b"oops", "find")
