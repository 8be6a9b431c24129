"""Outgoing notifications."""

from smtplib import SMTPException
from flask import current_app, render_template
from flask_mail import Message
from coffeerun.extensions import mail


def send_new_application(application):
    """Tell the shop a credit application came in."""
    msg = Message(
        subject='New Credit Application Received',
        recipients=[current_app.config['ADMIN_NOTIFICATION_EMAIL']],
        body=render_template('mail/new_application.txt', application=application),
    )
    mail.send(msg)
    return msg


def send_application_result(application, qualification):
    """Send the applicant their decision."""
    subject = ('Credit Application Approved!' if qualification.qualified
               else 'Credit Application Update')
    msg = Message(
        subject=subject,
        recipients=[application.email],
        body=render_template('mail/application_result.txt',
                             application=application,
                             qualification=qualification),
    )
    mail.send(msg)
    return msg


def deliver_credit_notifications(application, qualification):
    """Send both credit emails; delivery failures are logged, not raised."""
    for send, args in ((send_new_application, (application,)),
                       (send_application_result, (application, qualification))):
        try:
            send(*args)
        except (SMTPException, OSError):
            current_app.logger.exception('Credit notification failed', extra={
                'application_id': application.id,
                'mailer': send.__name__,
            })


def notify_order_placed(order):
    """Order confirmation hook; confirmation emails are not sent yet."""
    current_app.logger.info('Order confirmation pending', extra={
        'order_id': order.id,
        'order_number': order.order_number,
    })
