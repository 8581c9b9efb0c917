"""Constants and defaults.

Note: Sheet names and column layouts live here so every adapter agrees on them.
"""

EMPLOYEES_SHEET = "Employees"
SESSIONS_SHEET = "Sessions"
LEDGER_SHEET = "Master"

HEADER_ROW = 1
FIRST_DATA_ROW = 2

DEFAULT_SESSION_HOURS = 8

EMPLOYEE_HEADERS = ["Name", "Password", "Role"]
SESSION_HEADERS = ["Token", "Username", "Role", "Created At", "Expires At"]

# (column key, header) in the order of a newly created ledger. The first
# sixteen are the original Master layout; later columns were added after it.
# Existing sheets are read by header name and missing headers are appended.
LEDGER_COLUMNS = [
    ("submission_id", "Submission ID"),
    ("timestamp", "Timestamp"),
    ("employee_name", "Employee Name"),
    ("date", "Date"),
    ("day_of_week", "Day of Week"),
    ("equipment_num", "Equipment #"),
    ("beg_miles", "Beg Miles/Hrs"),
    ("end_miles", "End Miles/Hrs"),
    ("total_miles", "Total Miles"),
    ("fuel_gallons", "Fuel Gallons"),
    ("injured", "Injured"),
    ("injury_details", "Injury Details"),
    ("signature", "Signature"),
    ("work_log_json", "Work Log JSON"),
    ("status", "Status"),
    ("manager_notes", "Manager Notes"),
    ("time_in", "Time In"),
    ("time_out", "Time Out"),
    ("regional_beg_miles", "Regional Beg Miles"),
    ("regional_end_miles", "Regional End Miles"),
    ("truck_defects", "Truck Defects"),
    ("trailer_defects", "Trailer Defects"),
    ("defect_remarks", "Defect Remarks"),
    ("invoice_num", "Invoice #"),
]
LEDGER_KEYS = [key for key, _ in LEDGER_COLUMNS]
LEDGER_HEADERS = [header for _, header in LEDGER_COLUMNS]

WORK_LOG_KEYS = [
    "load_time",
    "del_time",
    "truck_equip",
    "num_loads",
    "unit_meas",
    "material_type",
    "source_supplier",
    "job_desc",
    "job_num",
    "job_hours",
]

ARCHIVE_TITLE = "MAPLE CREEK BACKHOE SERVICE INC. - EMPLOYEE TIME CARD"
