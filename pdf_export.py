from __future__ import annotations
from io import BytesIO
from xml.sax.saxutils import escape
from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.cidfonts import UnicodeCIDFont
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from models import ScheduleData, StudyData
from messages import area_label, get_messages, join_areas
from planner import FALLBACK_FOCUS_AREA

# built-in Helvetica has no CJK glyphs
CID_FONTS = {"ja": "HeiseiKakuGo-W5"}
USED_STYLES = ("Title", "Normal", "Heading2", "Heading3", "Italic")


def _font_for(locale: str) -> str | None:
    font_name = CID_FONTS.get(locale)
    if font_name and font_name not in pdfmetrics.getRegisteredFontNames():
        pdfmetrics.registerFont(UnicodeCIDFont(font_name))
    return font_name


def schedule_to_pdf(schedule: ScheduleData, study_data: StudyData) -> bytes:
    buf = BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=letter,
        leftMargin=40,
        rightMargin=40,
        topMargin=40,
        bottomMargin=40,
    )
    styles = getSampleStyleSheet()
    locale = schedule.locale
    font_name = _font_for(locale)
    if font_name:
        for style_name in USED_STYLES:
            styles[style_name].fontName = font_name
    font_rules = [("FONTNAME", (0, 0), (-1, -1), font_name)] if font_name else []
    priority_labels = get_messages(locale)["priority_labels"]
    habits = study_data.study_habits
    elems = []

    title = "Study Schedule"
    if study_data.name:
        title += f": {study_data.name}"
    # Paragraph text is markup, so user-entered names must be escaped
    elems.append(Paragraph(escape(title), styles["Title"]))
    elems.append(Spacer(1, 10))
    elems.append(Paragraph(
        f"Time of day: {habits.preferred_time_of_day} | Session: {habits.session_duration}m "
        f"| Days/week: {habits.days_per_week} | Overall improvement: +{schedule.overall_improvement}%",
        styles["Normal"],
    ))
    elems.append(Spacer(1, 8))
    elems.append(Paragraph(escape(schedule.recommendation), styles["Normal"]))
    elems.append(Spacer(1, 12))

    elems.append(Paragraph("Subject analysis", styles["Heading3"]))
    analysis_data = [["Subject", "Performance", "Hours/week", "Weak areas", "Improvement"]]
    for a in schedule.subject_analysis:
        analysis_data.append([
            a.name,
            f"{a.current_performance}%",
            f"{a.time_allocation:.1f}",
            join_areas(a.weak_areas, locale, FALLBACK_FOCUS_AREA, "list_sep"),
            f"+{a.expected_improvement}%",
        ])
    analysis_table = Table(analysis_data, hAlign="LEFT")
    analysis_table.setStyle(TableStyle(font_rules + [
        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ("ALIGN", (1, 1), (2, -1), "RIGHT"),
    ]))
    elems.append(analysis_table)
    elems.append(Spacer(1, 12))

    for index, week in enumerate(schedule.weekly_schedules, start=1):
        if not week:
            continue
        elems.append(Paragraph(f"Week {index}", styles["Heading2"]))
        for day in week:
            elems.append(Paragraph(day.date.strftime("%A, %Y-%m-%d"), styles["Heading3"]))
            table_data = [["Time", "Subject", "Focus", "Priority"]]
            for session in day.sessions:
                table_data.append([
                    f"{session.start_time} - {session.end_time}",
                    session.subject,
                    area_label(session.focus_area, locale),
                    priority_labels[session.priority],
                ])
            table = Table(table_data, hAlign="LEFT", colWidths=[90, 150, 150, 70])
            table.setStyle(TableStyle(font_rules + [
                ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
            ]))
            elems.append(table)
            if day.unplaced:
                elems.append(Paragraph(
                    escape(f"No free slot for: {', '.join(day.unplaced)}"),
                    styles["Italic"],
                ))
            elems.append(Spacer(1, 8))

    doc.build(elems)
    return buf.getvalue()
