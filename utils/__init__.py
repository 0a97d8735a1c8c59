# Utility modules for the herbal back-office
from .sanitizer import sanitize_text, sanitize_name, sanitize_tax_id
