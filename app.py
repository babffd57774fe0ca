# app.py
import os
from functools import wraps
from typing import Optional

from flask import flash, jsonify, redirect, render_template, request, session, url_for

from core import BarbershopBaseApp
from models import BookingStatus, UserRole
from store import today_iso

DASHBOARD_TABS = ("dashboard", "services", "settings", "history", "reviews")


def current_role() -> UserRole:
    return UserRole(session.get("role", UserRole.NONE.value))


def require_role(role: UserRole):
    """Redirect to the landing screen unless the session carries the given role."""
    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            if current_role() != role:
                return redirect(url_for("index"))
            return view(*args, **kwargs)
        return wrapped
    return decorator


class BarbershopApp(BarbershopBaseApp):
    """Landing, customer flow and staff dashboard."""

    def __init__(self, config: Optional[dict] = None):
        super().__init__(config)
        self._register_routes()

    def share_link(self) -> str:
        return url_for("index", view="client", _external=True)

    def _refresh_summary(self) -> None:
        session["barber_message"] = self.store.daily_summary()

    # -------------------------------------------------

    def _register_routes(self):
        app = self.app
        store = self.store

        @app.context_processor
        def inject_shop():
            return {"settings": store.settings, "role": current_role().value}

        # =========================
        # Entry
        # =========================
        @app.route("/")
        def index():
            """Landing screen; ?view=client jumps to the customer flow"""
            if request.args.get("view") == "client":
                session["role"] = UserRole.CLIENT.value
                return redirect(url_for("client"))
            return render_template("landing.html")

        @app.route("/exit")
        def exit_():
            session["role"] = UserRole.NONE.value
            session.pop("barber_message", None)
            return redirect(url_for("index"))

        # =========================
        # Customer flow
        # =========================
        @app.route("/client")
        def client():
            session["role"] = UserRole.CLIENT.value

            date = request.args.get("date") or today_iso()
            selected_service = store.get_service(request.args.get("service", ""))
            selected_time = request.args.get("time", "")

            return render_template(
                "client.html",
                services=store.services,
                selected_service=selected_service,
                selected_date=date,
                selected_time=selected_time,
                today=today_iso(),
                slots=store.time_slots(date),
            )

        @app.route("/book", methods=["POST"])
        def book():
            """Create a booking for the selected service and slot"""
            service_id = request.form.get("service_id", "").strip()
            date = request.form.get("date", "").strip()
            time_ = request.form.get("time", "").strip()
            name = request.form.get("name", "").strip()
            phone = request.form.get("phone", "").strip()

            back = url_for("client", service=service_id or None, date=date or None, time=time_ or None)

            service = store.get_service(service_id)
            if service is None or not self.validate_booking_data(service_id, date, time_, name):
                return redirect(back)

            # past dates are never bookable
            if date < today_iso() or not self.validate_time(time_) or not store.is_slot_available(date, time_):
                self.logger.info(f"Slot {date} {time_} is not available")
                flash("Este horário não está mais disponível.", "info")
                return redirect(url_for("client", service=service_id, date=date))

            booking = store.create_booking(service, date, time_, name, phone)
            flash(booking.ai_confirmation_message, "success")

            # selection is cleared, back to the top of the page
            return redirect(url_for("client", date=date) + "#top")

        @app.route("/review", methods=["POST"])
        def review():
            service_id = request.form.get("service_id", "").strip()
            name = request.form.get("customer_name", "").strip()
            rating = self.parse_rating(request.form.get("rating"))
            comment = request.form.get("comment", "").strip()

            booking = store.submit_review(service_id, name, rating, comment)
            if booking is None:
                flash("Preencha todos os campos para avaliar.", "info")
            else:
                flash("Obrigado pela sua avaliação!", "success")
            return redirect(url_for("client"))

        # =========================
        # Staff
        # =========================
        @app.route("/barber/login", methods=["POST"])
        def barber_login():
            session["role"] = UserRole.BARBER.value
            self._refresh_summary()
            return redirect(url_for("barber"))

        @app.route("/barber")
        @require_role(UserRole.BARBER)
        def barber():
            """Staff dashboard"""
            tab = request.args.get("tab", "dashboard")
            if tab not in DASHBOARD_TABS:
                tab = "dashboard"

            editing_booking = store.get_booking(request.args.get("edit_booking", ""))
            editing_service = store.get_service(request.args.get("edit_service", ""))

            return render_template(
                "barber.html",
                tab=tab,
                message=session.get("barber_message", ""),
                share_link=self.share_link(),
                services=store.services,
                todays=store.todays_appointments(),
                revenue=store.total_revenue(),
                history=store.history(),
                reviews=store.reviews(),
                average_rating=store.average_rating(),
                review_count=store.review_count(),
                statuses=list(BookingStatus),
                editing_booking=editing_booking,
                editing_service=editing_service,
            )

        @app.route("/barber/refresh", methods=["POST"])
        @require_role(UserRole.BARBER)
        def barber_refresh():
            self._refresh_summary()
            flash("Agenda atualizada com novos insights!", "success")
            return redirect(url_for("barber"))

        @app.route("/barber/share-link")
        @require_role(UserRole.BARBER)
        def barber_share_link():
            return jsonify({"url": self.share_link()})

        @app.route("/barber/services", methods=["POST"])
        @require_role(UserRole.BARBER)
        def save_service():
            service_id = request.form.get("service_id", "").strip()
            name = request.form.get("name", "").strip()
            price = self.parse_price(request.form.get("price"))
            duration = self.parse_duration(request.form.get("duration_minutes"))
            image = request.form.get("image", "").strip() or None
            description = request.form.get("description", "").strip()

            back = url_for("barber", tab="services")
            if not self.validate_service_data(name, price):
                return redirect(back)

            if service_id:
                service = store.update_service(
                    service_id,
                    name=name,
                    price=price,
                    duration_minutes=duration,
                    image=image,
                    description=description,
                )
                if service is not None:
                    flash("Serviço atualizado!", "success")
            else:
                store.create_service(name, price, description, duration, image)
                flash("Novo serviço adicionado!", "success")
            return redirect(back)

        @app.route("/barber/services/<service_id>/delete", methods=["POST"])
        @require_role(UserRole.BARBER)
        def delete_service(service_id):
            if request.form.get("confirm") == "yes" and store.delete_service(service_id):
                flash("Serviço excluído.", "success")
            return redirect(url_for("barber", tab="services"))

        @app.route("/barber/bookings/<booking_id>", methods=["POST"])
        @require_role(UserRole.BARBER)
        def update_booking(booking_id):
            form = request.form
            booking = store.update_booking(
                booking_id,
                customer_name=form.get("customer_name") or None,
                date=form.get("date") or None,
                time_=form.get("time") or None,
                status=self.parse_status(form.get("status")),
            )
            if booking is not None:
                flash("Agendamento atualizado.", "success")
            return redirect(url_for("barber"))

        @app.route("/barber/bookings/<booking_id>/complete", methods=["POST"])
        @require_role(UserRole.BARBER)
        def complete_booking(booking_id):
            if store.complete_booking(booking_id) is not None:
                flash("Serviço concluído e arquivado!", "success")
            return redirect(url_for("barber"))

        @app.route("/barber/bookings/<booking_id>/cancel", methods=["POST"])
        @require_role(UserRole.BARBER)
        def cancel_booking(booking_id):
            if store.cancel_booking(booking_id) is not None:
                flash("Agendamento cancelado.", "info")
            return redirect(url_for("barber"))

        @app.route("/barber/settings", methods=["POST"])
        @require_role(UserRole.BARBER)
        def update_settings():
            name = request.form.get("name", "").strip()
            tagline = request.form.get("tagline", "").strip()
            store.update_settings(name=name or None, tagline=tagline)
            flash("Configurações salvas!", "success")
            return redirect(url_for("barber", tab="settings"))


def create_app(config: Optional[dict] = None):
    return BarbershopApp(config).app


# =========================
# Run
# =========================
if __name__ == "__main__":
    barbershop = BarbershopApp()
    barbershop.run(port=int(os.getenv("PORT", 5000)))
