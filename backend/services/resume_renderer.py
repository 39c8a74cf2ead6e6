"""Plain-text ATS rendering of a resume, used for export."""

from models.schemas.resume import ResumeData


def _section(title: str, lines: list[str]) -> list[str]:
    return [title, "-" * len(title), *lines, ""]


def render_plain_text(resume: ResumeData) -> str:
    """Render standard section headers and simple dash bullets, no columns."""
    contact = resume.contact_info
    contact_line = " | ".join(
        part for part in (contact.email, contact.phone, contact.location, contact.linkedin) if part
    )

    out = [resume.full_name.upper()]
    if contact_line:
        out.append(contact_line)
    out.append("")

    if resume.summary:
        out += _section("PROFESSIONAL SUMMARY", [resume.summary])
    if resume.skills:
        out += _section("CORE COMPETENCIES", [", ".join(resume.skills)])

    if resume.experience:
        lines: list[str] = []
        for exp in resume.experience:
            header = " | ".join(p for p in (exp.role, exp.company, exp.dates, exp.location) if p)
            lines.append(header)
            lines.extend(f"- {bullet}" for bullet in exp.description)
            lines.append("")
        out += _section("PROFESSIONAL EXPERIENCE", lines[:-1])

    if resume.education:
        lines = [
            " | ".join(p for p in (edu.school, edu.degree, edu.dates) if p)
            for edu in resume.education
        ]
        out += _section("EDUCATION", lines)

    return "\n".join(out).strip() + "\n"
