from flask import Blueprint, current_app, jsonify, request

from ..exceptions import (
    RentalError,
    InvalidRequestError,
    VehicleNotFoundError,
    VehicleUnavailableError,
    OverloadError,
    BatteryLowError,
    VehicleNotRentedError,
    RenterMismatchError,
    SevereDamageError,
    NotElectricError,
)
from ..services.common import to_float_safe, to_int_safe
from ..utils.filters import fmt_iso_local

bp = Blueprint("rentals", __name__, url_prefix="/")

STATUS_BY_ERROR = {
    InvalidRequestError: 400,
    RenterMismatchError: 403,
    VehicleNotFoundError: 404,
    VehicleUnavailableError: 409,
    VehicleNotRentedError: 409,
    SevereDamageError: 409,
    OverloadError: 422,
    BatteryLowError: 422,
    NotElectricError: 422,
}


def _manager():
    return current_app.extensions["rentfleet"]


def _payload() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        data = request.form.to_dict()
    if not isinstance(data, dict):
        raise InvalidRequestError("Request body must be a JSON object")
    return data


def _require(data: dict, key: str, convert):
    value = convert(data.get(key))
    if value is None:
        raise InvalidRequestError(f"Missing or invalid '{key}'")
    return value


def _renter(data: dict, required: bool = True):
    rid = str(data.get("renter_id") or "").strip()
    if not rid and required:
        raise InvalidRequestError("Missing 'renter_id'")
    return rid or None


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


@bp.errorhandler(RentalError)
def handle_rental_error(e: RentalError):
    """Typed engine failures become JSON error bodies."""
    status = STATUS_BY_ERROR.get(type(e), 400)
    return jsonify({"error": e.error, "message": e.message}), status


@bp.get("/vehicles")
def list_vehicles():
    """Fleet listing, insertion order, with rented status."""
    return jsonify({"vehicles": _manager().list_fleet()})


@bp.get("/vehicles/<int:vid>")
def vehicle_detail(vid):
    v = next((d for d in _manager().list_fleet() if d["vehicle_id"] == vid), None)
    if v is None:
        raise VehicleNotFoundError(f"Vehicle not found id={vid}")
    return jsonify(v)


@bp.get("/rentals")
def list_rentals():
    """Active rentals, with the due date also shown in the configured timezone."""
    tz = current_app.config["TIMEZONE"]
    rentals = _manager().active_rentals()
    for r in rentals:
        r["due_local"] = fmt_iso_local(r["due_at"], tz)
    return jsonify({"rentals": rentals})


@bp.post("/rent")
def rent_vehicle():
    data = _payload()
    receipt = _manager().rent(
        renter_id=_renter(data),
        vehicle_id=_require(data, "vehicle_id", to_int_safe),
        days=_require(data, "days", to_int_safe),
        load_kg=_require(data, "load_kg", to_float_safe) if "load_kg" in data else 0.0,
    )
    return jsonify(receipt.to_dict()), 201


@bp.post("/return")
def return_vehicle():
    data = _payload()
    receipt = _manager().return_vehicle(
        renter_id=_renter(data),
        vehicle_id=_require(data, "vehicle_id", to_int_safe),
        actual_days=_require(data, "actual_days", to_int_safe),
        damaged=_as_bool(data.get("damaged", False)),
    )
    return jsonify(receipt.to_dict())


@bp.post("/charge")
def charge_battery():
    """Charge an EV. `renter_id` is optional and only logged."""
    data = _payload()
    receipt = _manager().charge_battery(
        vehicle_id=_require(data, "vehicle_id", to_int_safe),
        kwh=_require(data, "kwh", to_float_safe),
        renter_id=_renter(data, required=False),
    )
    return jsonify(receipt.to_dict())
