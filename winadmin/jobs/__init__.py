from .deprovisioner import deprovision_user, deprovision_users, unique_usernames
from .health_reporter import collect_snapshot, write_reports
from .outcome_log import OutcomeLog
from .passwords import generate_password, make_password_source
from .provisioner import provision_user, provision_users

__all__ = [
    "OutcomeLog",
    "collect_snapshot",
    "deprovision_user",
    "deprovision_users",
    "generate_password",
    "make_password_source",
    "provision_user",
    "provision_users",
    "unique_usernames",
    "write_reports",
]
