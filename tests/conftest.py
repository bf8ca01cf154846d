"""Shared fixtures: an in-memory stand-in for the search service behind httpx.MockTransport."""

import asyncio
import copy
import json
import re

import httpx
import pytest

from meili_client.clients.meili.MeiliClient import MeiliClient
from meili_client.models.config import ConnectionConfig

HOST = "http://meili.test"
MASTER_KEY = "masterKey"

# documented defaults of a freshly created index
DEFAULT_SETTINGS = {
    "rankingRules": ["typo", "words", "proximity", "attribute", "wordsPosition", "exactness"],
    "distinctAttribute": None,
    "searchableAttributes": ["*"],
    "displayedAttributes": ["*"],
    "stopWords": [],
    "synonyms": {},
    "acceptNewFields": True,
}

SETTINGS_PATHS = {
    "synonyms": "synonyms",
    "stop-words": "stopWords",
    "ranking-rules": "rankingRules",
    "distinct-attribute": "distinctAttribute",
    "searchable-attributes": "searchableAttributes",
    "displayed-attributes": "displayedAttributes",
    "accept-new-fields": "acceptNewFields",
}


class FakeMeiliService:
    """Minimal MeiliSearch lookalike. Updates are applied at once and reported as processed."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.healthy = True
        self.indexes: dict[str, dict] = {}
        self.documents: dict[str, dict[str, dict]] = {}
        self.settings: dict[str, dict] = {}
        self.updates: dict[str, list[dict]] = {}
        self._next_update_id = 0
        # searches wait on this gate when it is set up by a test
        self.search_gate: asyncio.Event | None = None
        self.search_started: asyncio.Event | None = None
        self.routes = [
            ("GET", r"/health", self._get_health),
            ("PUT", r"/health", self._put_health),
            ("GET", r"/keys", lambda m, b: (200, {"private": "8c222193c4dff5a19689d637416820bc623375f2ad4c31a2e3a76e8f4c70440d", "public": "948413b6667024a0704c2023916c21eaf0a13485a586c43e4d2df520852a4fb8"})),
            ("GET", r"/stats", self._get_database_stats),
            ("GET", r"/version", lambda m, b: (200, {"commitSha": "b46889b5f0f2f8b91438a08a358ba8f05fc09fc1", "buildDate": "2020-03-04T14:44:06Z", "pkgVersion": "0.9.0"})),
            ("GET", r"/sys-info", lambda m, b: (200, {"memoryUsage": 55.85, "processorUsage": [0.0, 4.0], "global": {"totalMemory": 16777216}})),
            ("GET", r"/sys-info/pretty", lambda m, b: (200, {"memoryUsage": "55.85 %", "processorUsage": ["0.00 %", "4.00 %"], "global": {"totalMemory": "16.78 GB"}})),
            ("GET", r"/indexes", lambda m, b: (200, list(self.indexes.values()))),
            ("POST", r"/indexes", self._create_index),
            ("GET", r"/indexes/(?P<uid>[^/]+)", self._with_index(lambda uid, m, b: (200, self.indexes[uid]))),
            ("PUT", r"/indexes/(?P<uid>[^/]+)", self._with_index(self._update_index)),
            ("DELETE", r"/indexes/(?P<uid>[^/]+)", self._with_index(self._delete_index)),
            ("GET", r"/indexes/(?P<uid>[^/]+)/stats", self._with_index(self._get_index_stats)),
            ("GET", r"/indexes/(?P<uid>[^/]+)/search", self._with_index(self._search)),
            ("GET", r"/indexes/(?P<uid>[^/]+)/documents", self._with_index(self._list_documents)),
            ("POST", r"/indexes/(?P<uid>[^/]+)/documents", self._with_index(self._add_documents)),
            ("PUT", r"/indexes/(?P<uid>[^/]+)/documents", self._with_index(self._update_documents)),
            ("DELETE", r"/indexes/(?P<uid>[^/]+)/documents", self._with_index(self._delete_all_documents)),
            ("POST", r"/indexes/(?P<uid>[^/]+)/documents/delete-batch", self._with_index(self._delete_batch)),
            ("GET", r"/indexes/(?P<uid>[^/]+)/documents/(?P<doc>[^/]+)", self._with_index(self._get_document)),
            ("DELETE", r"/indexes/(?P<uid>[^/]+)/documents/(?P<doc>[^/]+)", self._with_index(self._delete_document)),
            ("GET", r"/indexes/(?P<uid>[^/]+)/updates", self._with_index(lambda uid, m, b: (200, self.updates[uid]))),
            ("GET", r"/indexes/(?P<uid>[^/]+)/updates/(?P<update>\d+)", self._with_index(self._get_update)),
            ("GET", r"/indexes/(?P<uid>[^/]+)/settings", self._with_index(lambda uid, m, b: (200, self.settings[uid]))),
            ("POST", r"/indexes/(?P<uid>[^/]+)/settings", self._with_index(self._update_settings)),
            ("DELETE", r"/indexes/(?P<uid>[^/]+)/settings", self._with_index(self._reset_settings)),
            ("GET", r"/indexes/(?P<uid>[^/]+)/settings/(?P<concern>[a-z-]+)", self._with_index(self._get_concern)),
            ("POST", r"/indexes/(?P<uid>[^/]+)/settings/(?P<concern>[a-z-]+)", self._with_index(self._update_concern)),
            ("DELETE", r"/indexes/(?P<uid>[^/]+)/settings/(?P<concern>[a-z-]+)", self._with_index(self._reset_concern)),
        ]

    ################ TRANSPORT ##################
    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.endswith("/search") and self.search_gate is not None:
            if self.search_started is not None:
                self.search_started.set()
            await self.search_gate.wait()

        body = json.loads(request.content) if request.content else None
        for method, pattern, route in self.routes:
            match = re.fullmatch(pattern, path)
            if match and method == request.method:
                self._request = request
                status, payload = route(match, body)
                if payload is None:
                    return httpx.Response(status)
                return httpx.Response(status, json=payload)
        return httpx.Response(404, json={"message": f"Resource {path} not found", "errorCode": "not_found"})

    ################ HELPERS ##################
    def _with_index(self, route):
        def wrapped(match, body):
            uid = match.group("uid")
            if uid not in self.indexes:
                return 404, {"message": f"Index {uid} not found", "errorCode": "index_not_found"}
            return route(uid, match, body)
        return wrapped

    def _enqueue(self, uid: str, update_type: str) -> tuple[int, dict]:
        update_id = self._next_update_id
        self._next_update_id += 1
        self.updates[uid].append({
            "status": "processed",
            "updateId": update_id,
            "type": {"name": update_type},
            "duration": 0.01,
            "enqueuedAt": "2020-03-04T14:44:06.000000Z",
            "processedAt": "2020-03-04T14:44:06.010000Z",
        })
        return 202, {"updateId": update_id}

    def _primary_key(self, uid: str) -> str:
        return self.indexes[uid].get("primaryKey") or "id"

    ################ HEALTH / STATS ##################
    def _get_health(self, match, body):
        if self.healthy:
            return 204, None
        return 503, {"message": "Server is in maintenance, please try again later", "errorCode": "maintenance"}

    def _put_health(self, match, body):
        self.healthy = body["health"]
        return 204, None

    def _get_database_stats(self, match, body):
        return 200, {
            "databaseSize": 447819776,
            "lastUpdate": "2020-03-04T14:44:06.000000Z",
            "indexes": {uid: self._get_index_stats(uid, match, body)[1] for uid in self.indexes},
        }

    ################ INDEXES ##################
    def _create_index(self, match, body):
        uid = body.get("uid")
        if not uid:
            return 400, {"message": "Index creation must have an uid", "errorCode": "missing_uid"}
        if uid in self.indexes:
            return 400, {"message": f"Impossible to create index; index already exists: {uid}", "errorCode": "index_already_exists"}
        self.indexes[uid] = {
            "uid": uid,
            "name": body.get("name", uid),
            "createdAt": "2020-03-04T14:44:06.000000Z",
            "updatedAt": "2020-03-04T14:44:06.000000Z",
            "primaryKey": body.get("primaryKey"),
        }
        self.documents[uid] = {}
        self.settings[uid] = copy.deepcopy(DEFAULT_SETTINGS)
        self.updates[uid] = []
        return 201, self.indexes[uid]

    def _update_index(self, uid, match, body):
        if "name" in body:
            self.indexes[uid]["name"] = body["name"]
        if "primaryKey" in body:
            self.indexes[uid]["primaryKey"] = body["primaryKey"]
        return 200, self.indexes[uid]

    def _delete_index(self, uid, match, body):
        for store in (self.indexes, self.documents, self.settings, self.updates):
            store.pop(uid)
        return 204, None

    def _get_index_stats(self, uid, match, body):
        return 200, {"numberOfDocuments": len(self.documents[uid]), "isIndexing": False, "fieldsFrequency": {}}

    ################ SEARCH ##################
    def _search(self, uid, match, body):
        params = self._request.url.params
        query = params.get("q", "")
        offset = int(params.get("offset", 0))
        limit = int(params.get("limit", 20))
        hits = [doc for doc in self.documents[uid].values() if query.lower() in json.dumps(doc).lower()]
        if "attributesToRetrieve" in params:
            keep = params["attributesToRetrieve"].split(",")
            hits = [{k: v for k, v in doc.items() if k in keep} for doc in hits]
        return 200, {
            "hits": hits[offset:offset + limit],
            "offset": offset,
            "limit": limit,
            "nbHits": len(hits),
            "exhaustiveNbHits": False,
            "processingTimeMs": 1,
            "query": query,
        }

    ################ DOCUMENTS ##################
    def _list_documents(self, uid, match, body):
        params = self._request.url.params
        docs = list(self.documents[uid].values())
        offset = int(params.get("offset", 0))
        limit = int(params.get("limit", 20))
        docs = docs[offset:offset + limit]
        if "attributesToRetrieve" in params:
            keep = params["attributesToRetrieve"].split(",")
            docs = [{k: v for k, v in doc.items() if k in keep} for doc in docs]
        return 200, docs

    def _add_documents(self, uid, match, body, merge: bool = False):
        if "primaryKey" in self._request.url.params and not self.indexes[uid].get("primaryKey"):
            self.indexes[uid]["primaryKey"] = self._request.url.params["primaryKey"]
        key = self._primary_key(uid)
        for doc in body:
            doc_id = str(doc[key])
            if merge and doc_id in self.documents[uid]:
                self.documents[uid][doc_id].update(doc)
            else:
                self.documents[uid][doc_id] = dict(doc)
        return self._enqueue(uid, "DocumentsPartial" if merge else "DocumentsAddition")

    def _update_documents(self, uid, match, body):
        return self._add_documents(uid, match, body, merge=True)

    def _get_document(self, uid, match, body):
        doc = self.documents[uid].get(match.group("doc"))
        if doc is None:
            return 404, {"message": f"Document with id {match.group('doc')} not found", "errorCode": "document_not_found"}
        return 200, doc

    def _delete_document(self, uid, match, body):
        self.documents[uid].pop(match.group("doc"), None)
        return self._enqueue(uid, "DocumentsDeletion")

    def _delete_batch(self, uid, match, body):
        for doc_id in body:
            self.documents[uid].pop(str(doc_id), None)
        return self._enqueue(uid, "DocumentsDeletion")

    def _delete_all_documents(self, uid, match, body):
        self.documents[uid].clear()
        return self._enqueue(uid, "ClearAll")

    ################ UPDATES ##################
    def _get_update(self, uid, match, body):
        update_id = int(match.group("update"))
        for update in self.updates[uid]:
            if update["updateId"] == update_id:
                return 200, update
        return 404, {"message": f"Update {update_id} not found", "errorCode": "not_found"}

    ################ SETTINGS ##################
    def _update_settings(self, uid, match, body):
        unknown = set(body) - set(DEFAULT_SETTINGS)
        if unknown:
            return 400, {"message": f"unknown field {sorted(unknown)[0]}", "errorCode": "bad_request"}
        self.settings[uid].update(body)
        return self._enqueue(uid, "Settings")

    def _reset_settings(self, uid, match, body):
        self.settings[uid] = copy.deepcopy(DEFAULT_SETTINGS)
        return self._enqueue(uid, "Settings")

    def _concern_key(self, match):
        return SETTINGS_PATHS.get(match.group("concern"))

    def _get_concern(self, uid, match, body):
        key = self._concern_key(match)
        if key is None:
            return 404, {"message": "Resource not found", "errorCode": "not_found"}
        return 200, self.settings[uid][key]

    def _update_concern(self, uid, match, body):
        key = self._concern_key(match)
        if key is None:
            return 404, {"message": "Resource not found", "errorCode": "not_found"}
        self.settings[uid][key] = body
        return self._enqueue(uid, "Settings")

    def _reset_concern(self, uid, match, body):
        key = self._concern_key(match)
        if key is None:
            return 404, {"message": "Resource not found", "errorCode": "not_found"}
        self.settings[uid][key] = copy.deepcopy(DEFAULT_SETTINGS[key])
        return self._enqueue(uid, "Settings")


@pytest.fixture
def service() -> FakeMeiliService:
    return FakeMeiliService()


@pytest.fixture
async def client(service):
    client = MeiliClient(
        ConnectionConfig(host=HOST, api_key=MASTER_KEY),
        http_transport=httpx.MockTransport(service.handle),
    )
    yield client
    await client.close()


@pytest.fixture
async def products(client, service):
    """Index "products" holding three documents."""
    await client.create_index({"uid": "products"})
    index = client.get_index("products")
    await index.add_documents([
        {"id": 1, "title": "Thin laptop", "price": 999, "brand": "Acme"},
        {"id": 2, "title": "Gaming laptop", "price": 1999, "brand": "Zeta"},
        {"id": 3, "title": "Mechanical keyboard", "price": 120, "brand": "Acme"},
    ])
    service.requests.clear()
    return index
