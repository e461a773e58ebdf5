from __future__ import annotations

from resume_tailor.schemas.domain import Resume


def _lines(*values: str | None) -> str:
    return "\n".join(value for value in values if value)


def _date_range(start: str, end: str | None, current: bool) -> str:
    if current:
        return f"{start} - Present"
    if end:
        return f"{start} - {end}"
    return start


def _section(title: str, body: str) -> str:
    return f"# {title}\n{body}"


def _contact(resume: Resume) -> str:
    info = resume.personal_info
    return _lines(
        info.full_name,
        info.email,
        info.phone,
        info.location,
        f"LinkedIn: {info.linked_in}" if info.linked_in else None,
        f"Website: {info.website}" if info.website else None,
        f"GitHub: {info.github}" if info.github else None,
    )


def _experience(resume: Resume) -> str:
    entries = []
    for exp in resume.work_experiences:
        meta = " | ".join(
            part for part in (exp.company, exp.location, _date_range(exp.start_date, exp.end_date, exp.current)) if part
        )
        highlights = "\n".join(f"- {item}" for item in exp.highlights)
        entries.append(_lines(exp.position, meta, highlights))
    return "\n\n".join(entries)


def _education(resume: Resume) -> str:
    entries = []
    for edu in resume.education:
        heading = f"{edu.degree} in {edu.field}" if edu.degree and edu.field else (edu.degree or edu.field)
        meta = " | ".join(
            part
            for part in (edu.institution, edu.location, _date_range(edu.start_date, edu.end_date, edu.current))
            if part
        )
        entries.append(_lines(heading, meta, f"GPA: {edu.gpa}" if edu.gpa else None))
    return "\n\n".join(entries)


def _skills(resume: Resume) -> str:
    grouped: dict[str, list[str]] = {}
    for skill in resume.skills:
        grouped.setdefault(skill.category or "Other", []).append(skill.name)
    return "\n".join(f"{category}: {', '.join(names)}" for category, names in grouped.items())


def _projects(resume: Resume) -> str:
    entries = []
    for project in resume.projects:
        highlights = "\n".join(f"- {item}" for item in project.highlights)
        entries.append(_lines(project.name, project.description, highlights))
    return "\n\n".join(entries)


def _certifications(resume: Resume) -> str:
    entries = []
    for cert in resume.certifications:
        line = cert.name
        if cert.issuer:
            line = f"{line} - {cert.issuer}"
        if cert.date:
            line = f"{line} ({cert.date})"
        entries.append(line)
    return "\n".join(entries)


def resume_to_text(resume: Resume) -> str:
    """Render a resume as labeled plain-text sections, skipping empty ones."""
    sections: list[tuple[str, str]] = [
        ("CONTACT INFORMATION", _contact(resume)),
        ("PROFESSIONAL SUMMARY", resume.professional_summary.content.strip()),
        ("EXPERIENCE", _experience(resume)),
        ("EDUCATION", _education(resume)),
        ("SKILLS", _skills(resume)),
        ("PROJECTS", _projects(resume)),
        ("CERTIFICATIONS", _certifications(resume)),
    ]

    for custom in resume.custom_sections:
        entries = []
        for entry in custom.entries:
            bullets = "\n".join(f"- {bullet}" for bullet in entry.bullets)
            entries.append(_lines(entry.title, entry.subtitle, entry.description, bullets))
        sections.append((custom.title.upper(), "\n\n".join(item for item in entries if item)))

    return "\n\n".join(_section(title, body) for title, body in sections if body.strip())
