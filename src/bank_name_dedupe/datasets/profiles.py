from __future__ import annotations

# Canonical bank names with their four-letter IFSC prefix and three-digit MICR bank code.
BANK_CATALOGUE: list[tuple[str, str, str]] = [
    ("STATE BANK OF INDIA", "SBIN", "002"),
    ("PUNJAB NATIONAL BANK", "PUNB", "024"),
    ("BANK OF BARODA", "BARB", "012"),
    ("CANARA BANK", "CNRB", "015"),
    ("UNION BANK OF INDIA", "UBIN", "026"),
    ("BANK OF INDIA", "BKID", "013"),
    ("INDIAN BANK", "IDIB", "019"),
    ("CENTRAL BANK OF INDIA", "CBIN", "016"),
    ("INDIAN OVERSEAS BANK", "IOBA", "020"),
    ("UCO BANK", "UCBA", "028"),
    ("HDFC BANK LTD", "HDFC", "240"),
    ("ICICI BANK LTD", "ICIC", "229"),
    ("AXIS BANK LTD", "UTIB", "211"),
    ("KOTAK MAHINDRA BANK LTD", "KKBK", "485"),
    ("YES BANK LTD", "YESB", "532"),
    ("IDBI BANK LTD", "IBKL", "259"),
    ("FEDERAL BANK LTD", "FDRL", "049"),
    ("SOUTH INDIAN BANK LTD", "SIBL", "059"),
    ("KARUR VYSYA BANK LTD", "KVBL", "053"),
    ("CITY UNION BANK LTD", "CIUB", "054"),
]

CITY_CODES: list[str] = ["110", "400", "560", "600", "700", "500", "380", "411"]

# Interchangeable legal suffixes seen in free-text bank names.
SUFFIX_VARIANTS: dict[str, str] = {
    "LTD": "LIMITED",
    "LIMITED": "LTD",
}
