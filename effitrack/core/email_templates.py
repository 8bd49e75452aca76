"""
Deadline alert email templates.

Every interpolated value is HTML-escaped; titles and names come from free-text
form fields.
"""
import html
from datetime import date
from typing import Tuple

_WRAPPER = (
    '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px; '
    'background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); border-radius: 10px;">'
    '<div style="background: white; padding: 30px; border-radius: 8px;">{content}</div></div>'
)

_ROW = '<p style="margin: 10px 0 0 0; font-size: 14px; color: #666;"><strong>{label}:</strong> {value}</p>'

_SIGNATURE = '<p style="font-size: 14px; color: #999;">Best regards,<br>EFFI-TRACK Team</p>'


def days_phrase(days_left: int) -> str:
    """'1 day' / 'N days'."""
    return f"{days_left} day{'' if days_left == 1 else 's'}"


def format_status(status: str) -> str:
    return status.replace("_", " ").upper()


def _details(rows, accent: str) -> str:
    body = "".join(_ROW.format(label=label, value=value) for label, value in rows)
    return (
        f'<div style="background: #f8f9fa; padding: 20px; border-radius: 6px; margin-bottom: 20px; '
        f'border-left: 4px solid {accent};">{body}</div>'
    )


def render_project_alert(employee_name: str, project_title: str, deadline: date, days_left: int) -> Tuple[str, str]:
    name = html.escape(employee_name or "there")
    title = html.escape(project_title)
    subject = f"⚠️ Project Deadline Alert: {project_title}"
    content = (
        '<h1 style="color: #667eea; margin-bottom: 20px;">🚨 Project Deadline Approaching</h1>'
        f'<p style="font-size: 16px; color: #333;">Hi <strong>{name}</strong>,</p>'
        f'<p style="font-size: 16px; color: #333;">This is a reminder that the project '
        f'<strong>"{title}"</strong> deadline is approaching soon.</p>'
        + _details(
            [
                ("Project", title),
                ("Deadline", deadline.strftime("%Y-%m-%d")),
                ("Days Remaining", days_phrase(days_left)),
            ],
            accent="#667eea",
        )
        + '<p style="font-size: 14px; color: #666;">Please ensure all tasks are completed on time.</p>'
        + _SIGNATURE
    )
    return subject, _WRAPPER.format(content=content)


def render_task_alert(
    employee_name: str, task_title: str, status: str, deadline: date, days_left: int
) -> Tuple[str, str]:
    name = html.escape(employee_name or "there")
    title = html.escape(task_title)
    subject = f"⏰ Task Deadline Alert: {task_title}"
    content = (
        '<h1 style="color: #667eea; margin-bottom: 20px;">⏰ Task Deadline Approaching</h1>'
        f'<p style="font-size: 16px; color: #333;">Hi <strong>{name}</strong>,</p>'
        f'<p style="font-size: 16px; color: #333;">Your assigned task '
        f'<strong>"{title}"</strong> deadline is coming up soon.</p>'
        + _details(
            [
                ("Task", title),
                ("Status", html.escape(format_status(status))),
                ("Deadline", deadline.strftime("%Y-%m-%d")),
                ("Days Remaining", days_phrase(days_left)),
            ],
            accent="#764ba2",
        )
        + '<p style="font-size: 14px; color: #666;">Please complete this task before the deadline.</p>'
        + _SIGNATURE
    )
    return subject, _WRAPPER.format(content=content)
