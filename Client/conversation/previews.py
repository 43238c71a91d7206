import base64
from typing import Dict, List, Tuple

from loguru import logger

from conversation.image_intake import AcceptedImageSet, ImageHandle


def build_preview_url(image: ImageHandle) -> str:
    encoded = base64.b64encode(image.data).decode("utf-8")
    return f"data:{image.mime_type};base64,{encoded}"


class PreviewRegistry:
    """Displayable preview per accepted image, released when the image leaves the set."""

    def __init__(self):
        self._previews: Dict[Tuple[str, int, int], str] = {}

    def sync(self, images: AcceptedImageSet) -> List[str]:
        """Regenerate previews for ``images``, one per image in the same order."""
        wanted = {image.identity for image in images}
        for identity in list(self._previews):
            if identity not in wanted:
                self.release(identity)

        for image in images:
            if image.identity not in self._previews:
                self._previews[image.identity] = build_preview_url(image)

        return [self._previews[image.identity] for image in images]

    def release(self, identity: Tuple[str, int, int]):
        if self._previews.pop(identity, None) is not None:
            logger.debug(f"Released preview for {identity[0]}")

    def release_all(self):
        for identity in list(self._previews):
            self.release(identity)

    def __len__(self) -> int:
        return len(self._previews)
