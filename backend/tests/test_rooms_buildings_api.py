import pytest

from app.api.routes.buildings import create_building as create_building_route
from app.core.exceptions import DuplicateResourceError
from app.models.building import Building
from app.schemas.building import BuildingCreate

ROOMS = "/api/v1/rooms"
BUILDINGS = "/api/v1/buildings"


def create_building(client, **overrides):
    payload = {"name": "Science Block", "code": "SCI", "floors": 4, "address": "North campus"}
    payload.update(overrides)
    response = client.post(BUILDINGS, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def create_room(client, **overrides):
    payload = {"roomNumber": "101", "roomType": "classroom", "capacity": 40, "facilities": ["projector"]}
    payload.update(overrides)
    response = client.post(ROOMS, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_building_crud(client):
    created = create_building(client)
    assert created["code"] == "SCI"
    assert created["campusId"] is None

    fetched = client.get(f"{BUILDINGS}/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["name"] == "Science Block"

    duplicate = client.post(BUILDINGS, json={"name": "Other", "code": "SCI"})
    assert duplicate.status_code == 409
    assert duplicate.json() == {
        "message": "Building with code SCI already exists",
        "details": {"field": "code", "value": "SCI"},
    }

    assert client.get(f"{BUILDINGS}/missing").status_code == 404
    assert client.post(BUILDINGS, json={"name": "No code"}).status_code == 422
    assert client.post(BUILDINGS, json={"name": "Bad", "code": "B", "floors": 0}).status_code == 422


def test_building_list_is_paginated_by_name(client):
    for name, code in [("Library", "LIB"), ("Arts", "ART"), ("Medicine", "MED")]:
        create_building(client, name=name, code=code)
    body = client.get(BUILDINGS, params={"limit": 2}).json()
    assert [item["name"] for item in body["buildings"]] == ["Arts", "Library"]
    assert body["pagination"]["totalPages"] == 2
    assert body["pagination"]["hasNext"] is True


def test_room_crud(client):
    building = create_building(client)
    room = create_room(client, buildingId=building["id"], facilities=["projector", " projector ", "ac"])
    assert room["isActive"] is True
    assert room["facilities"] == ["projector", "ac"]
    assert room["buildingId"] == building["id"]

    response = client.put(f"{ROOMS}/{room['id']}", json={"capacity": 60, "isActive": False})
    assert response.status_code == 200
    assert response.json()["capacity"] == 60
    assert response.json()["isActive"] is False
    assert response.json()["roomNumber"] == "101"

    assert client.get(f"{ROOMS}/{room['id']}").json()["capacity"] == 60
    assert client.get(f"{ROOMS}/missing").status_code == 404
    assert client.put(f"{ROOMS}/missing", json={"capacity": 10}).status_code == 404


def test_room_validation(client):
    assert client.post(ROOMS, json={"roomType": "lab"}).status_code == 422
    assert client.post(ROOMS, json={"roomNumber": "1", "roomType": "garage"}).status_code == 422
    assert client.post(ROOMS, json={"roomNumber": "1", "roomType": "lab", "capacity": 0}).status_code == 422

    missing_building = client.post(ROOMS, json={"roomNumber": "1", "roomType": "lab", "buildingId": "nope"})
    assert missing_building.status_code == 404

    room = create_room(client)
    assert client.put(f"{ROOMS}/{room['id']}", json={"capacity": -5}).status_code == 422
    cleared = client.put(f"{ROOMS}/{room['id']}", json={"roomNumber": None})
    assert cleared.status_code == 422
    assert "roomNumber" in cleared.json()["message"]


def test_room_list_filters(client):
    building = create_building(client)
    create_room(client, roomNumber="101", buildingId=building["id"])
    create_room(client, roomNumber="L1", roomType="lab", buildingId=building["id"])
    inactive = create_room(client, roomNumber="A1", roomType="auditorium")
    client.put(f"{ROOMS}/{inactive['id']}", json={"isActive": False})

    everything = client.get(ROOMS).json()
    assert [item["roomNumber"] for item in everything["rooms"]] == ["101", "A1", "L1"]

    in_building = client.get(ROOMS, params={"buildingId": building["id"]}).json()
    assert in_building["pagination"]["total"] == 2

    labs = client.get(ROOMS, params={"roomType": "lab"}).json()
    assert [item["roomNumber"] for item in labs["rooms"]] == ["L1"]

    active = client.get(ROOMS, params={"isActive": "true"}).json()
    assert {item["roomNumber"] for item in active["rooms"]} == {"101", "L1"}


def test_create_building_maps_unique_violation_to_conflict(db):
    # Pending and unflushed, so the route's lookup misses it and the commit collides.
    db.add(Building(name="Racing", code="RACE"))

    with pytest.raises(DuplicateResourceError) as exc_info:
        create_building_route(BuildingCreate(name="Other", code="RACE"), db)

    assert exc_info.value.status_code == 409
    assert db.query(Building).count() == 0
