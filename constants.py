"""
Global Constants Module

Single source of truth for timing values, user-facing messages, form metadata
and portal defaults used across agents, storage and UI controllers.
"""

class TimingConstants:
    """Timing constants for delays and timeouts. All values in milliseconds (ms)."""

    # Delay between a successful submission and the switch to the tenant dashboard
    SUBMIT_REDIRECT_DELAY = 2000   # 2000ms (2s) - long enough to read the status

    # Background task bookkeeping
    TASK_JOIN_TIMEOUT = 30000      # 30000ms (30s) - upper bound when joining background tasks

class PortalDefaults:
    """Defaults used when the environment does not provide a value."""

    LANDLORD_EMAIL = "landlord@nearyone.com"
    APPLICATIONS_COLLECTION = "applications"
    UPLOAD_PREFIX = "applications"
    OBJECT_STORE_DIR = "uploads"

class FormConstants:
    """
    Application form metadata.
    Keys are the camelCase document names stored in the datastore.
    """

    FIELD_LABELS = {
        # Application details
        'dateOfApplication': "Date of Application",
        'desiredMoveInDate': "Desired Move-in Date",
        'applyingFor': "Applying for Address/Unit",
        'email': "Email Address",
        'phone': "Phone Number",

        # Applicant and co-resident
        'applicantFullName': "Applicant's Full Name",
        'applicantDob': "Date of Birth",
        'applicantSsn': "Social Security #",
        'coResidentName': "Co-Resident Full Name",
        'coResidentDob': "Co-Resident Date of Birth",
        'coResidentSsn': "Co-Resident Social Security #",

        # Residential history
        'presentAddress': "Present Address",
        'presentCity': "City",
        'presentState': "State",
        'presentZip': "Zip",
        'presentLandlordName': "Landlord Name",
        'presentLandlordPhone': "Landlord Phone #",
        'presentMonthlyRent': "Current Monthly Rent",
        'presentReasonForLeaving': "Reason for Leaving",
        'previousAddress': "Previous Address",
        'previousCity': "Previous City",
        'previousState': "Previous State",
        'previousZip': "Previous Zip",
        'previousLandlordName': "Previous Landlord Name",
        'previousLandlordPhone': "Previous Landlord Phone #",
        'previousMonthlyRent': "Previous Monthly Rent",
        'previousReasonForLeaving': "Previous Reason for Leaving",

        # Employment
        'companyName': "Name of Company",
        'companyAddress': "Company Address",
        'companyPhone': "Company Phone #",
        'timeAtCompany': "Amount of time at current Company/Position",
        'jobRole': "Job Role/Position",
        'weeklyIncome': "Weekly/Bi-Weekly Income",
    }

    REQUIRED_FIELDS = (
        'dateOfApplication',
        'desiredMoveInDate',
        'applyingFor',
        'email',
        'phone',
        'applicantFullName',
        'applicantDob',
        'applicantSsn',
        'presentAddress',
        'presentCity',
        'presentState',
        'presentZip',
        'presentLandlordName',
        'presentLandlordPhone',
        'presentMonthlyRent',
        'presentReasonForLeaving',
        'companyName',
        'companyAddress',
        'companyPhone',
        'timeAtCompany',
        'jobRole',
        'weeklyIncome',
    )

    OCCUPANT_FIELDS = ('name', 'relationship', 'dob')

    # Typed by the landlord before a delete is allowed (compared case-insensitively)
    DELETE_CONFIRMATION_PHRASE = "delete application"

    # Storage namespace for uploads when the applicant name is blank
    GENERIC_UPLOAD_NAMESPACE = "unnamed-applicant"

class Messages:
    """Standardized user-facing and log messages."""

    # Submission
    SUBMIT_SUCCESS = "Application submitted successfully!"
    UPDATE_SUCCESS = "Application updated successfully!"
    SUBMIT_FAILED = "Failed to submit application. Please try again."
    UPLOAD_FAILED = "Failed to upload {}. Please try again."
    MISSING_REQUIRED = "Please fill out all required fields: {}"
    SUBMITTING = "Submitting application..."

    # Authentication
    INVALID_CREDENTIALS = "Invalid email or password."
    WEAK_PASSWORD = "Password should be at least 6 characters."
    EMAIL_IN_USE = "An account with this email already exists."
    USER_NOT_FOUND = "No account found with that email."
    FEDERATED_FAILED = "Sign-in with the external provider failed."
    PASSWORD_MISMATCH = "Passwords do not match."
    RESET_EMAIL_SENT = "Password reset email sent. Check your inbox."
    AUTH_FAILED = "Authentication failed: {}"

    # Landlord dashboard
    DELETE_CONFIRM_REQUIRED = 'Please type "delete application" to confirm.'
    DELETE_SUCCESS = "Application deleted."
    DELETE_FAILED = "Failed to delete application: {}"
    RESYNC_SUCCESS = "Applications refreshed."
    RESYNC_FAILED = "Failed to refresh applications: {}"

    # Session
    LOAD_FAILED = "Failed to load your application: {}"

    # Task management
    TASK_CREATED = "Created new task: {}"
    TASK_COMPLETED = "Task completed successfully: {}"
    TASK_FAILED = "Task failed: {}"

    # View state
    VIEW_CHANGED = "View changed: {} -> {}"
    INVALID_TRANSITION = "Cannot move from {} to {}"
