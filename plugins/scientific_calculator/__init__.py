"""Scientific Calculator plugin manifest."""

manifest = {
    "title": "Scientific Calculator",
    "summary": "Evaluate calculator expressions in degrees or radians, format results and sample curves for plotting.",
    "category": "General Utilities",
    "blueprint": "scientific_calculator",
    "icon": "img/GeneralUtilityTools_icon.png",
}

__all__ = ["manifest"]
