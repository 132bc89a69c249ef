"""JSON シリアライズのファサード

呼び出し側はこのモジュールの関数だけを使い、実際のエンジンは
プロセス全体で 1 つの JsonEngine インスタンスに委譲する。
エンジンはインポート時に固定され、以後は変更しない。
"""

from __future__ import annotations

import codecs
import json
import uuid
from collections.abc import Callable
from pathlib import Path
from typing import IO, Any, Protocol

from .exceptions import DecodingError, EncodingError, FileReadError

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}

_WHITESPACE = " \t\n\r"
_DELIMITERS = _WHITESPACE + "{}[],:\""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant: {name}")


class RawMessage(bytes):
    """エンコード済み JSON。エンコード時にそのまま出力される。"""


class JsonEngine(Protocol):
    """ファサードが必要とするエンジンの機能。"""

    def encode(
        self,
        value: Any,
        *,
        indent: str | None,
        default: Callable[[Any], Any],
    ) -> str: ...

    def decode(self, text: str) -> Any: ...

    def raw_decode(self, text: str, index: int) -> tuple[Any, int]: ...


class StdlibJsonEngine:
    """標準ライブラリ json による標準互換エンジン。"""

    def __init__(self, escape_html: bool = True) -> None:
        self._escape_html = escape_html
        self._decoder = json.JSONDecoder(parse_constant=_reject_constant)

    def encode(
        self,
        value: Any,
        *,
        indent: str | None,
        default: Callable[[Any], Any],
    ) -> str:
        text = json.dumps(
            value,
            ensure_ascii=False,
            allow_nan=False,
            check_circular=True,
            indent=indent,
            separators=(",", ": ") if indent is not None else (",", ":"),
            default=default,
        )
        if self._escape_html:
            for char, escaped in _HTML_ESCAPES.items():
                text = text.replace(char, escaped)
        return text

    def decode(self, text: str) -> Any:
        return self._decoder.decode(text)

    def raw_decode(self, text: str, index: int) -> tuple[Any, int]:
        return self._decoder.raw_decode(text, index)


_engine: JsonEngine = StdlibJsonEngine()


def _to_text(data: bytes | str) -> str:
    if isinstance(data, str):
        return data
    return bytes(data).decode("utf-8")


def _encode(value: Any, indent: str | None) -> str:
    raw_parts: dict[str, str] = {}
    token = uuid.uuid4().hex

    def default(obj: Any) -> Any:
        if isinstance(obj, RawMessage):
            raw = _to_text(obj) if obj else "null"
            if not valid(raw):
                raise EncodingError(f"invalid raw JSON message: {raw[:64]!r}")
            placeholder = f"@@raw:{token}:{len(raw_parts)}@@"
            raw_parts[placeholder] = raw
            return placeholder
        to_dict = getattr(obj, "to_dict", None)
        if callable(to_dict):
            return to_dict()
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")

    try:
        text = _engine.encode(value, indent=indent, default=default)
    except EncodingError:
        raise
    except (TypeError, ValueError, RecursionError) as e:
        raise EncodingError(f"Failed to encode JSON: {e}", cause=e) from e
    for placeholder, raw in raw_parts.items():
        text = text.replace(f'"{placeholder}"', raw)
    return text


def marshal(value: Any) -> bytes:
    """値を JSON バイト列にエンコードする。

    Raises:
        EncodingError: 未対応の型、循環参照、NaN などを含む場合
    """
    return _encode(value, None).encode("utf-8")


def marshal_indent(value: Any, prefix: str, indent: str) -> bytes:
    """整形した JSON を返す。2 行目以降の各行は prefix で始まる。"""
    text = _encode(value, indent)
    if prefix:
        text = text.replace("\n", "\n" + prefix)
    return text.encode("utf-8")


def marshal_pretty(value: Any) -> bytes:
    return marshal_indent(value, "", "    ")


def marshal_string(value: Any) -> str:
    """ベストエフォートで JSON 文字列を返す。

    エンコードに失敗した場合はエラーを捨てて空文字列を返す。
    失敗を検知する必要がある場合は marshal を使うこと。
    """
    try:
        return marshal(value).decode("utf-8")
    except EncodingError:
        return ""


def marshal_string_pretty(value: Any) -> str:
    """marshal_string の整形版。失敗時は空文字列を返す。"""
    try:
        return marshal_pretty(value).decode("utf-8")
    except EncodingError:
        return ""


def _build(value: Any, cls: type[Any] | None) -> Any:
    if cls is None:
        return value
    if not isinstance(value, dict):
        raise DecodingError(
            f"cannot decode JSON {type(value).__name__} into {cls.__name__}"
        )
    try:
        return cls.from_dict(value)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise DecodingError(f"JSON does not match {cls.__name__}: {e!r}", cause=e) from e


def unmarshal(data: bytes | str, cls: type[Any] | None = None) -> Any:
    """JSON をデコードする。cls を指定した場合は cls.from_dict で変換する。

    Raises:
        DecodingError: 不正な JSON またはスキーマ不一致の場合
    """
    try:
        value = _engine.decode(_to_text(data))
    except (ValueError, UnicodeDecodeError) as e:
        raise DecodingError(f"Failed to decode JSON: {e}", cause=e) from e
    return _build(value, cls)


def unmarshal_string(text: str, cls: type[Any] | None = None) -> Any:
    return unmarshal(text, cls)


def unmarshal_file(path: str | Path, cls: type[Any] | None = None) -> Any:
    """JSON ファイルを読み込んでデコードする。

    Raises:
        FileReadError: ファイルを開けない・読めない場合
        DecodingError: 内容が不正な場合
    """
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise FileReadError(f"Failed to read JSON file: {path}", cause=e) from e
    return unmarshal(data, cls)


def valid(data: bytes | str) -> bool:
    try:
        _engine.decode(_to_text(data))
    except (ValueError, UnicodeDecodeError):
        return False
    return True


_MISSING = object()


class _Document:
    """JsonAny 間で共有するドキュメント。ルートは最初の参照時に 1 回だけデコードする。"""

    def __init__(self, data: bytes | str) -> None:
        self._data = data
        self._root: Any = _MISSING
        self.error: str | None = None

    def root(self) -> Any:
        if self._root is _MISSING:
            try:
                self._root = unmarshal(self._data)
            except DecodingError as e:
                self.error = str(e)
                self._root = None
        return self._root


class JsonAny:
    """JSON ドキュメントへの読み取り専用アクセサ。

    値が要求されるまでデコードしない。get() で派生したアクセサは
    デコード済みのルートを共有する。パスが存在しない場合は
    value が None になり last_error に理由が入る。
    """

    def __init__(self, document: _Document, path: tuple[str | int, ...] = ()) -> None:
        self._document = document
        self._path = path
        self._value: Any = _MISSING
        self.last_error: str | None = None

    def _resolve(self) -> Any:
        if self._value is not _MISSING:
            return self._value
        current = self._document.root()
        if self._document.error is not None:
            self.last_error = self._document.error
            self._value = None
            return None
        for segment in self._path:
            if isinstance(current, dict) and isinstance(segment, str) and segment in current:
                current = current[segment]
            elif (
                isinstance(current, list)
                and isinstance(segment, int)
                and not isinstance(segment, bool)
                and -len(current) <= segment < len(current)
            ):
                current = current[segment]
            else:
                self.last_error = f"path {list(self._path)!r} not found at {segment!r}"
                current = None
                break
        self._value = current
        return current

    @property
    def value(self) -> Any:
        return self._resolve()

    def exists(self) -> bool:
        self._resolve()
        return self.last_error is None

    def get(self, *path: str | int) -> JsonAny:
        return JsonAny(self._document, self._path + path)

    def to_str(self) -> str:
        value = self._resolve()
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        return marshal_string(value)

    def to_int(self) -> int:
        value = self._resolve()
        try:
            return int(value)
        except (TypeError, ValueError):
            return 0

    def to_float(self) -> float:
        value = self._resolve()
        try:
            return float(value)
        except (TypeError, ValueError):
            return 0.0

    def to_bool(self) -> bool:
        return bool(self._resolve())

    def keys(self) -> list[str]:
        value = self._resolve()
        return list(value.keys()) if isinstance(value, dict) else []

    def size(self) -> int:
        value = self._resolve()
        return len(value) if isinstance(value, (dict, list)) else 0


def get(data: bytes | str, *path: str | int) -> JsonAny:
    """キー（str）またはインデックス（int）のパスで値を参照する。"""
    return JsonAny(_Document(data), path)


class Encoder:
    """バイナリストリームへ JSON 値を 1 行ずつ書き込むエンコーダ。"""

    def __init__(self, stream: IO[bytes]) -> None:
        self._stream = stream
        self._prefix = ""
        self._indent: str | None = None

    def set_indent(self, prefix: str, indent: str) -> None:
        self._prefix = prefix
        self._indent = indent

    def encode(self, value: Any) -> None:
        if self._indent is None:
            data = marshal(value)
        else:
            data = marshal_indent(value, self._prefix, self._indent)
        self._stream.write(data + b"\n")


class Decoder:
    """バイナリストリームから空白区切りの JSON 値を順に読み出すデコーダ。"""

    def __init__(self, stream: IO[bytes], chunk_size: int = 64 * 1024) -> None:
        self._stream = stream
        self._chunk_size = chunk_size
        self._text_decoder = codecs.getincrementaldecoder("utf-8")()
        self._buffer = ""
        self._eof = False

    def _fill(self) -> bool:
        if self._eof:
            return False
        chunk = self._stream.read(self._chunk_size)
        try:
            if not chunk:
                self._eof = True
                self._buffer += self._text_decoder.decode(b"", final=True)
                return False
            self._buffer += self._text_decoder.decode(chunk)
        except UnicodeDecodeError as e:
            raise DecodingError(f"Failed to decode JSON stream: {e}", cause=e) from e
        return True

    def _skip_whitespace(self) -> None:
        while True:
            self._buffer = self._buffer.lstrip(_WHITESPACE)
            if self._buffer or not self._fill():
                return

    def more(self) -> bool:
        """読み出せる値が残っているか。"""
        self._skip_whitespace()
        return bool(self._buffer)

    def _may_continue(self, value: Any, end: int) -> bool:
        # 数値は区切り文字が続くまで次のチャンクに続きがある可能性がある
        if end == len(self._buffer):
            return True
        is_number = isinstance(value, (int, float)) and not isinstance(value, bool)
        return is_number and self._buffer[end] not in _DELIMITERS

    def decode(self, cls: type[Any] | None = None) -> Any:
        """次の値を返す。

        Raises:
            EOFError: ストリームの終端に達した場合
            DecodingError: 不正な JSON の場合
        """
        self._skip_whitespace()
        if not self._buffer:
            raise EOFError("end of JSON stream")
        while True:
            try:
                value, end = _engine.raw_decode(self._buffer, 0)
            except ValueError as e:
                if self._fill():
                    continue
                raise DecodingError(f"Failed to decode JSON stream: {e}", cause=e) from e
            if self._may_continue(value, end) and self._fill():
                continue
            self._buffer = self._buffer[end:]
            return _build(value, cls)

    def __iter__(self) -> Decoder:
        return self

    def __next__(self) -> Any:
        try:
            return self.decode()
        except EOFError:
            raise StopIteration from None


def new_encoder(stream: IO[bytes]) -> Encoder:
    return Encoder(stream)


def new_decoder(stream: IO[bytes]) -> Decoder:
    return Decoder(stream)
