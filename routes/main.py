"""
Main routes (service info, health).

Lets a client discover the options the price list offers before it
builds an order.
"""

from flask import Blueprint, current_app, jsonify

main_bp = Blueprint("main", __name__)


@main_bp.route("/")
def index():
    """Describe the service: sheet size, padding and orderable options."""
    service = current_app.config["QUOTE_SERVICE"]
    schedule = service.schedule
    return jsonify({
        "service": "print-delivery",
        "page": {
            "label": service.page_label,
            **service.page_size.to_dict(),
        },
        "padding": service.padding,
        "paper_types": list(schedule.paper_types),
        "delivery_speeds": list(schedule.delivery_speeds),
        "pricing": schedule.to_dict(),
    })


@main_bp.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok"})
