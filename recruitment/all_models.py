from recruitment.auth.models import User, Admin
from recruitment.companies.models import Company
from recruitment.candidates.models import Candidate
from recruitment.jobs.models import Job
from recruitment.applications.models import Application
from recruitment.admin_actions.models import AdminAction

# Export all models for easy import
__all__ = [
    'User',
    'Admin',
    'Company',
    'Candidate',
    'Job',
    'Application',
    'AdminAction',
]
