from typing import Any, Dict, List, Optional, Protocol


class Search(Protocol):
    def index_photo(self, doc: Dict[str, Any]) -> Dict[str, Any]: ...
    def search_photos(self, body: Dict[str, Any]) -> List[Dict[str, Any]]: ...
    def ensure_index(self) -> None: ...


class Blob(Protocol):
    def custom_labels(self, bucket: str, key: str) -> Optional[str]: ...
    def put_photo(self, key: str, data: bytes, content_type: str, custom_labels: str) -> Dict[str, Any]: ...
    def public_url(self, bucket: str, key: str) -> str: ...


class Vision(Protocol):
    def detect_labels(self, bucket: str, key: str) -> List[str]: ...


class Intent(Protocol):
    def slot_value(self, text: str) -> str: ...
