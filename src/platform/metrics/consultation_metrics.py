from prometheus_client import Counter


class ConsultationMetrics:
    """
    Consultation service business metrics

    Exposed on /metrics; counters only, labelled by outcome so that a spike of
    capacity rejections or failed verifications is visible without log digging.
    """

    def __init__(self):
        # ========== Admission Control ==========
        self.slot_consumptions = Counter(
            'slot_consumptions_total',
            'Slot consumption attempts',
            ['result'],  # result: consumed/exhausted
        )

        self.slot_resets = Counter('slot_resets_total', 'Admin resets of a month counter')

        # ========== Bookings ==========
        self.booking_requests = Counter(
            'booking_requests_total',
            'Booking requests by outcome',
            ['result'],  # result: created/capacity_exhausted/invalid/error
        )

        self.booking_decisions = Counter(
            'booking_decisions_total',
            'Admin decisions on bookings',
            ['decision'],  # decision: confirmed/rejected
        )

        # ========== Reviews ==========
        self.review_transitions = Counter(
            'review_transitions_total',
            'Review lifecycle transitions',
            ['transition', 'result'],  # transition: submit/verify/publish
        )

        # ========== Notifications ==========
        self.notifications = Counter(
            'notifications_total',
            'Outbound email notifications',
            ['kind', 'result'],  # result: sent/failed
        )

        # ========== Admin Gate ==========
        self.admin_auth_failures = Counter(
            'admin_auth_failures_total', 'Rejected admin credentials', ['action']
        )

    def record_slot_consumption(self, *, consumed: bool):
        self.slot_consumptions.labels(result='consumed' if consumed else 'exhausted').inc()

    def record_slot_reset(self):
        self.slot_resets.inc()

    def record_booking_request(self, *, result: str):
        self.booking_requests.labels(result=result).inc()

    def record_booking_decision(self, *, decision: str):
        self.booking_decisions.labels(decision=decision).inc()

    def record_review_transition(self, *, transition: str, success: bool):
        self.review_transitions.labels(
            transition=transition, result='success' if success else 'failure'
        ).inc()

    def record_notification(self, *, kind: str, sent: bool):
        self.notifications.labels(kind=kind, result='sent' if sent else 'failed').inc()

    def record_admin_auth_failure(self, *, action: str):
        self.admin_auth_failures.labels(action=action).inc()


# Global metrics instance
metrics = ConsultationMetrics()
