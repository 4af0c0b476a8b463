class StateKeys:
    """Keys for wizard data stored in ``st.session_state``."""

    CURRENT_STEP = "current_step"
    DOCUMENT = "document"
    COMPLETED_STEPS = "completed_steps"
    VIOLATIONS = "violations"
    BANNER = "banner"
    RESUME_ID = "resume_id"
    CLOSED = "closed"


class PayloadKeys:
    """Top-level keys of the resume create/update request body."""

    RESUME_NAME = "resume_name"
    PERSONAL_INFO = "personal_info"
    CAREER_EXPERIENCES = "career_experiences"
    VOLUNTEERING_EXPERIENCES = "volunteering_experiences"
    EDUCATION = "education"
    TECHNICAL_SKILLS = "technical_skills"
    SOFT_SKILLS = "soft_skills"
    CERTIFICATIONS = "certifications"
    LANGUAGES = "languages"
    PERSONAL_PROJECTS = "personal_projects"
    PERSONAL_LINKS = "personal_links"


class StepIds:
    """Stable identifiers of the wizard steps."""

    PERSONAL = "personal"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    LANGUAGES = "languages"
    CERTIFICATES = "certificates"
    LINKS = "links"
    PERSONAL_PROJECTS = "personalProjects"
    TEMPLATE = "template"
    PREVIEW = "preview"
