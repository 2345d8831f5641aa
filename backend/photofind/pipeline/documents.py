from urllib.parse import unquote_plus

from photofind.models import LabelSet, PhotoEvent, SearchDocument


def decode_object_key(raw: str) -> str:
    # Notification keys are URL-encoded with '+' standing in for spaces
    return unquote_plus(raw)


def build_document(event: PhotoEvent, labels: LabelSet) -> SearchDocument:
    """Map an event (with its key already decoded) and its labels to a document.

    Missing bucket, key or time are passed through untouched.
    """
    return SearchDocument(
        object_key=event.object_key,
        bucket=event.bucket,
        created_timestamp=event.event_time,
        labels=labels,
    )
