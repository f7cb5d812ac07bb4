"""Email bodies sent by the booking and review workflows"""

from datetime import tzinfo
from html import escape
from urllib.parse import urlencode

from src.service.consultation.app.dto.email_message import EmailKind, EmailMessage
from src.service.consultation.domain.entity.booking_entity import Booking
from src.service.consultation.domain.entity.review_entity import Review
from src.service.consultation.domain.enum.booking_status import BookingStatus


def _when(booking: Booking, business_tz: tzinfo) -> str:
    return booking.starts_at.astimezone(business_tz).strftime('%d.%m.%Y %H:%M')


def booking_received(*, booking: Booking, business_tz: tzinfo) -> EmailMessage:
    return EmailMessage(
        kind=EmailKind.BOOKING_RECEIVED,
        to=booking.email,
        subject='Your consultation request was received',
        html=(
            f'<p>Hi {escape(booking.name)},</p>'
            f'<p>we received your request for a {booking.duration_minutes} minute '
            f'consultation on {_when(booking, business_tz)}. '
            'You will get another email once it is confirmed.</p>'
        ),
    )


def booking_operator_alert(
    *, booking: Booking, operator_email: str, business_tz: tzinfo
) -> EmailMessage:
    discord = f'<li>Discord: {escape(booking.discord_name)}</li>' if booking.discord_name else ''
    note = f'<li>Note: {escape(booking.note)}</li>' if booking.note else ''
    return EmailMessage(
        kind=EmailKind.BOOKING_OPERATOR_ALERT,
        to=operator_email,
        subject=f'New free consultation request from {booking.name}',
        html=(
            '<ul>'
            f'<li>Name: {escape(booking.name)}</li>'
            f'<li>Email: {escape(booking.email)}</li>'
            f'{discord}{note}'
            f'<li>When: {_when(booking, business_tz)} ({booking.duration_minutes} min)</li>'
            f'<li>Booking: {booking.id}</li>'
            '</ul>'
        ),
    )


def booking_decided(*, booking: Booking, business_tz: tzinfo) -> EmailMessage:
    if booking.status == BookingStatus.CONFIRMED:
        subject = 'Your consultation is confirmed'
        text = f'your consultation on {_when(booking, business_tz)} is confirmed.'
    else:
        subject = 'Your consultation request'
        text = (
            f'unfortunately the requested time {_when(booking, business_tz)} '
            'cannot be offered. Feel free to pick another one.'
        )
    return EmailMessage(
        kind=EmailKind.BOOKING_DECIDED,
        to=booking.email,
        subject=subject,
        html=f'<p>Hi {escape(booking.name)},</p><p>{text}</p>',
    )


def review_verification(*, review: Review, code: str, public_base_url: str) -> EmailMessage:
    query = urlencode({'id': str(review.id), 'code': code})
    link = f'{public_base_url.rstrip("/")}/reviews/verify?{query}'
    return EmailMessage(
        kind=EmailKind.REVIEW_VERIFICATION,
        to=review.email,
        subject='Please confirm your review',
        html=(
            f'<p>Hi {escape(review.name)},</p>'
            '<p>thanks for your review. Please confirm it by opening this link:</p>'
            f'<p><a href="{escape(link)}">{escape(link)}</a></p>'
        ),
    )
