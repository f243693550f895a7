from __future__ import annotations

from ..models.field_schema import EntitySchema, FieldSpec, UniqueKey

"""Built-in entity schemas for the HR reference-data imports.

Each schema lists the CSV columns of one settings list (or of the user and
training certification imports), in export order, together with the rows of
its downloadable template file.
"""

__all__ = [
    "HEX_COLOR_PATTERN",
    "EMAIL_PATTERN",
    "URL_PATTERN",
    "DEGREE",
    "DESIGNATION",
    "DEPARTMENT",
    "JOB_ROLE",
    "JOB_TYPE",
    "SBU",
    "HR_CONTACT",
    "REFERENCE",
    "UNIVERSITY",
    "USER",
    "TRAINING",
    "BUILTIN_SCHEMAS",
]

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"
EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
URL_PATTERN = r"^[A-Za-z][A-Za-z0-9+.-]*://[^\s/?#]+[^\s]*$"

COLOR_MESSAGE = "Color code must be in hex format (e.g., #FF0000)"
EMAIL_MESSAGE = "Invalid email format"
URL_MESSAGE = "Invalid URL format"

UNIVERSITY_TYPES = ("Public", "Private", "International", "Special")
USER_ROLES = ("admin", "manager", "employee")


def _name(noun: str, label: str = "Name") -> FieldSpec:
    return FieldSpec(name="name", required=True, label=label, unique=True, duplicate_label=noun)


def _color() -> FieldSpec:
    return FieldSpec(
        name="color_code",
        label="Color code",
        pattern=HEX_COLOR_PATTERN,
        format_message=COLOR_MESSAGE,
    )


def _email(name: str = "email", label: str = "Email") -> FieldSpec:
    return FieldSpec(
        name=name,
        required=True,
        label=label,
        pattern=EMAIL_PATTERN,
        format_message=EMAIL_MESSAGE,
        unique=True,
        duplicate_label="email",
    )


DEGREE = EntitySchema(
    name="degree",
    label="degree",
    plural="degrees",
    fields=(
        _name("degree"),
        FieldSpec(name="full_form", label="Full form"),
    ),
    template_rows=(
        {"name": "BSc", "full_form": "Bachelor of Science"},
        {"name": "MA", "full_form": "Master of Arts"},
        {"name": "BBA", "full_form": "Bachelor of Business Administration"},
    ),
)

DESIGNATION = EntitySchema(
    name="designation",
    label="designation",
    plural="designations",
    fields=(_name("designation"),),
    template_rows=(
        {"name": "Software Engineer"},
        {"name": "Senior Software Engineer"},
        {"name": "Project Manager"},
    ),
)

DEPARTMENT = EntitySchema(
    name="department",
    label="department",
    plural="departments",
    fields=(
        _name("department"),
        FieldSpec(name="full_form", label="Full form"),
    ),
    template_rows=(
        {"name": "HR", "full_form": "Human Resources"},
        {"name": "IT", "full_form": "Information Technology"},
        {"name": "QA", "full_form": "Quality Assurance"},
    ),
)

JOB_ROLE = EntitySchema(
    name="job_role",
    label="job role",
    plural="job_roles",
    fields=(
        _name("job role"),
        FieldSpec(name="purpose", label="Purpose"),
        FieldSpec(name="responsibilities", label="Responsibilities"),
        _color(),
    ),
    template_rows=(
        {
            "name": "Developer",
            "purpose": "Software development and maintenance",
            "responsibilities": "Code, test, debug applications",
            "color_code": "#3B82F6",
        },
        {
            "name": "Manager",
            "purpose": "Team leadership and project management",
            "responsibilities": "Lead team, manage projects, coordinate tasks",
            "color_code": "#10B981",
        },
        {
            "name": "Designer",
            "purpose": "User interface and experience design",
            "responsibilities": "Create designs, prototypes, user flows",
            "color_code": "#8B5CF6",
        },
    ),
)

JOB_TYPE = EntitySchema(
    name="job_type",
    label="job type",
    plural="job_types",
    fields=(_name("job type"), _color()),
    template_rows=(
        {"name": "Full Time", "color_code": "#3B82F6"},
        {"name": "Part Time", "color_code": "#10B981"},
        {"name": "Contract", "color_code": "#F59E0B"},
    ),
)

SBU = EntitySchema(
    name="sbu",
    label="SBU",
    plural="sbus",
    fields=(
        _name("SBU name", label="SBU name"),
        _email("sbu_head_email", label="SBU head email"),
        FieldSpec(name="sbu_head_name", label="SBU head name"),
        FieldSpec(name="is_department", label="Is department", kind="boolean"),
    ),
    template_rows=(
        {
            "name": "Technology Division",
            "sbu_head_email": "tech.head@company.com",
            "sbu_head_name": "John Doe",
            "is_department": False,
        },
        {
            "name": "Marketing Department",
            "sbu_head_email": "marketing.head@company.com",
            "sbu_head_name": "Jane Smith",
            "is_department": True,
        },
        {
            "name": "Finance Division",
            "sbu_head_email": "finance.head@company.com",
            "sbu_head_name": "Bob Johnson",
            "is_department": False,
        },
    ),
)

HR_CONTACT = EntitySchema(
    name="hr_contact",
    label="HR contact",
    plural="hr_contacts",
    fields=(_name("name"), _email()),
    template_rows=(
        {"name": "Alice Brown", "email": "alice.brown@company.com"},
        {"name": "David Lee", "email": "david.lee@company.com"},
    ),
)

REFERENCE = EntitySchema(
    name="reference",
    label="reference",
    plural="references",
    fields=(
        FieldSpec(name="name", required=True, label="Name"),
        _email(),
        FieldSpec(name="designation", required=True, label="Designation"),
        FieldSpec(name="company", required=True, label="Company"),
    ),
    template_rows=(
        {
            "name": "John Smith",
            "email": "john.smith@company.com",
            "designation": "Senior Manager",
            "company": "Tech Corp",
        },
        {
            "name": "Jane Doe",
            "email": "jane.doe@startup.com",
            "designation": "Team Lead",
            "company": "Startup Inc",
        },
        {
            "name": "Robert Johnson",
            "email": "robert.j@enterprise.org",
            "designation": "Director",
            "company": "Enterprise Ltd",
        },
    ),
)

UNIVERSITY = EntitySchema(
    name="university",
    label="university",
    plural="universities",
    fields=(
        _name("university", label="University name"),
        FieldSpec(name="type", required=True, label="Type", choices=UNIVERSITY_TYPES),
        FieldSpec(name="acronyms", label="Acronyms"),
    ),
    template_rows=(
        {"name": "Harvard University", "type": "Private", "acronyms": "HU"},
        {"name": "University of California, Berkeley", "type": "Public", "acronyms": "UC Berkeley, UCB"},
        {"name": "Massachusetts Institute of Technology", "type": "Private", "acronyms": "MIT"},
        {"name": "International University of Monaco", "type": "International", "acronyms": "IUM"},
    ),
)

# CSV headers follow the user template handed out to HR (camelCase)
USER = EntitySchema(
    name="user",
    label="user",
    plural="users",
    fields=(
        _email(),
        FieldSpec(name="firstName", required=True, label="First name"),
        FieldSpec(name="lastName", label="Last name"),
        FieldSpec(name="role", label="Role", choices=USER_ROLES, default="employee"),
        FieldSpec(name="employeeId", label="Employee ID"),
        FieldSpec(name="sbuName", label="SBU name"),
    ),
    template_rows=(
        {
            "email": "john.doe@company.com",
            "firstName": "John",
            "lastName": "Doe",
            "role": "employee",
            "employeeId": "EMP001",
            "sbuName": "Technology Division",
        },
        {
            "email": "jane.smith@company.com",
            "firstName": "Jane",
            "lastName": "Smith",
            "role": "manager",
            "employeeId": "",
            "sbuName": "Marketing Department",
        },
        {
            "email": "admin@company.com",
            "firstName": "Admin",
            "lastName": "User",
            "role": "admin",
            "employeeId": "ADM001",
            "sbuName": "",
        },
    ),
)

TRAINING = EntitySchema(
    name="training",
    label="training certification",
    plural="training_certifications",
    fields=(
        FieldSpec(name="employee_id", required=True, label="Employee ID"),
        FieldSpec(name="title", required=True, label="Certification title"),
        FieldSpec(name="provider", label="Provider", default="Unknown"),
        FieldSpec(
            name="certification_date",
            label="Certification date",
            kind="date",
            format_message="Invalid date format. Use YYYY-MM-DD or MM/DD/YYYY",
        ),
        FieldSpec(name="description", label="Description"),
        FieldSpec(
            name="certificate_url",
            label="Certificate URL",
            pattern=URL_PATTERN,
            format_message=URL_MESSAGE,
        ),
        FieldSpec(name="is_renewable", label="Is renewable", kind="boolean", default=False),
        FieldSpec(
            name="expiry_date",
            label="Expiry date",
            kind="date",
            format_message="Invalid expiry date format. Use YYYY-MM-DD or MM/DD/YYYY",
        ),
    ),
    unique_together=(UniqueKey(("employee_id", "title"), label="employee ID and title combination"),),
    template_rows=(
        {
            "employee_id": "EMP001",
            "title": "AWS Solutions Architect",
            "provider": "Amazon Web Services",
            "certification_date": "2024-01-15",
            "description": "Cloud architecture certification",
            "certificate_url": "https://example.com/certificate1",
            "is_renewable": True,
            "expiry_date": "2027-01-15",
        },
        {
            "employee_id": "EMP002",
            "title": "Scrum Master Certification",
            "provider": "Scrum.org",
            "certification_date": "2024-03-20",
            "description": "Agile project management certification",
            "certificate_url": "",
            "is_renewable": False,
            "expiry_date": "",
        },
        {
            "employee_id": "EMP003",
            "title": "ISTQB Foundation Level",
            "provider": "ISTQB",
            "certification_date": "2023-12-10",
            "description": "Software testing foundation certification",
            "certificate_url": "https://example.com/certificate3",
            "is_renewable": True,
            "expiry_date": "2026-12-10",
        },
    ),
)

BUILTIN_SCHEMAS: dict[str, EntitySchema] = {
    s.name: s
    for s in (
        DEGREE,
        DESIGNATION,
        DEPARTMENT,
        JOB_ROLE,
        JOB_TYPE,
        SBU,
        HR_CONTACT,
        REFERENCE,
        UNIVERSITY,
        USER,
        TRAINING,
    )
}
