from datetime import datetime

from src.models import Booking, Bus


def test_booking_and_cancellation_scenario(client, make_bus, fetch, booking_payload):
    bus_id = make_bus(total_seats=2, available_seats=2)

    response = client.post("/api/bookings", json=booking_payload(bus_id, ["A1", "A2"]))
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    booking_id = body["bookingId"]
    assert fetch(Bus, bus_id).available_seats == 0

    response = client.post("/api/bookings", json=booking_payload(bus_id, ["A3"]))
    assert response.status_code == 409
    assert response.json()["message"] == "Not enough seats available"
    assert fetch(Bus, bus_id).available_seats == 0

    response = client.post(f"/api/cancel-booking/{booking_id}")
    assert response.status_code == 200
    assert response.json()["message"] == "Booking cancelled successfully"
    assert fetch(Bus, bus_id).available_seats == 2
    assert fetch(Booking, booking_id).status == "CANCELLED"

    response = client.post(f"/api/cancel-booking/{booking_id}")
    assert response.status_code == 404
    assert response.json()["message"] == "Booking not found or already cancelled"
    assert fetch(Bus, bus_id).available_seats == 2


def test_booking_stores_seats_in_order(client, make_bus, fetch, booking_payload):
    bus_id = make_bus()

    response = client.post("/api/bookings", json=booking_payload(bus_id, ["C3", "A1", "B2"]))

    booking = fetch(Booking, response.json()["bookingId"])
    assert booking.seats == "C3,A1,B2"
    assert booking.status == "CONFIRMED"
    assert booking.passenger_name == "Asha Rao"


def test_get_booking(client, make_bus, booking_payload):
    bus_id = make_bus()
    booking_id = client.post("/api/bookings", json=booking_payload(bus_id, ["A1"])).json()["bookingId"]

    response = client.get(f"/api/bookings/{booking_id}")

    assert response.status_code == 200
    body = response.json()
    assert body["bus_id"] == bus_id
    assert body["status"] == "CONFIRMED"
    assert client.get("/api/bookings/9999").status_code == 404


def test_booking_unknown_bus(client, booking_payload):
    response = client.post("/api/bookings", json=booking_payload(9999, ["A1"]))

    assert response.status_code == 404
    assert response.json()["message"] == "Bus not found"


def test_booking_requires_seats(client, make_bus, booking_payload):
    bus_id = make_bus()

    response = client.post("/api/bookings", json=booking_payload(bus_id, []))

    assert response.status_code == 400


def test_booking_rejects_duplicate_seats(client, make_bus, fetch, booking_payload):
    bus_id = make_bus(available_seats=10, total_seats=10)

    response = client.post("/api/bookings", json=booking_payload(bus_id, ["A1", "A1"]))

    assert response.status_code == 400
    assert fetch(Bus, bus_id).available_seats == 10


def test_booking_rejects_seat_labels_with_commas(client, make_bus, booking_payload):
    bus_id = make_bus()

    response = client.post("/api/bookings", json=booking_payload(bus_id, ["A1,A2"]))

    assert response.status_code == 400


def test_booking_requires_contact_fields(client, make_bus):
    bus_id = make_bus()

    response = client.post("/api/bookings", json={"busId": bus_id, "seats": ["A1"], "totalAmount": 500})

    assert response.status_code == 400
    message = response.json()["message"]
    for field in ("name", "email", "phone"):
        assert field in message


def test_cancel_unknown_booking(client):
    response = client.post("/api/cancel-booking/12345")

    assert response.status_code == 404


def test_my_bookings_newest_first_with_bus_details(client, make_bus, booking_payload):
    first_bus = make_bus(name="Royal Coaches", departure_time=datetime(2024, 6, 1, 8, 0))
    second_bus = make_bus(name="Night Rider", departure_time=datetime(2024, 6, 2, 22, 0))
    first = client.post("/api/bookings", json=booking_payload(first_bus, ["A1"])).json()["bookingId"]
    second = client.post("/api/bookings", json=booking_payload(second_bus, ["B1", "B2"])).json()["bookingId"]
    client.post(f"/api/cancel-booking/{first}")

    response = client.get("/api/my-bookings")

    assert response.status_code == 200
    rows = response.json()
    assert [row["id"] for row in rows] == [second, first]
    assert rows[0]["bus_name"] == "Night Rider"
    assert rows[0]["seats"] == "B1,B2"
    assert rows[0]["status"] == "CONFIRMED"
    assert rows[1]["status"] == "CANCELLED"
    assert {"from_location", "to_location", "departure_time", "total_amount", "booking_date"} <= set(rows[0])


def test_my_bookings_filtered_by_email(client, make_bus, booking_payload):
    bus_id = make_bus()
    client.post("/api/bookings", json=booking_payload(bus_id, ["A1"]))
    client.post("/api/bookings", json=booking_payload(bus_id, ["A2"], email="ravi@example.com"))

    response = client.get("/api/my-bookings", params={"email": "ravi@example.com"})

    assert response.status_code == 200
    assert [row["seats"] for row in response.json()] == ["A2"]


def test_out_of_range_ids_are_bad_input(client, booking_payload):
    too_big = "99999999999999999999"

    assert client.post(f"/api/cancel-booking/{too_big}").status_code == 400
    assert client.get(f"/api/bookings/{too_big}").status_code == 400
    assert client.get(f"/api/buses/{too_big}").status_code == 400

    response = client.post("/api/bookings", json=booking_payload(int(too_big), ["A1"]))
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_malformed_json_body(client):
    response = client.post(
        "/api/bookings",
        content='{"busId": 1, "seats": [',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Malformed JSON body"
