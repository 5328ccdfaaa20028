"""Page-level constants."""

PAGE_TITLE = "Showcase Pagination"

# Page sizes offered by the per-page selector
PER_PAGE_CHOICES = (2, 3, 4, 5, 8, 10, 12)
