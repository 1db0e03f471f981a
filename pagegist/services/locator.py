from pagegist.services.document import Element, tag_is

# Checked in order; the first tag found anywhere under the root wins.
CONTENT_TAG_PRIORITY = ("article", "main")


def locate_content(root: Element) -> Element:
    """Pick the element holding the primary content, falling back to ``root``."""
    for tag_name in CONTENT_TAG_PRIORITY:
        element = root.find_first(tag_is(tag_name))
        if element is not None:
            return element
    return root
