# Path: extraction/package/package_handler.py
"""
Filing Package Handler

Unpacks filing packages (ZIP archives) and parses their instance documents.

This module handles:
- Archive unpacking (directories and hidden members skipped)
- Member classification (instance candidate, linkbase, schema, other)
- Parsing every candidate through the full single-document pipeline
- Fallback scan of HTML members when no candidate yields facts
- Primary instance selection

Example:
    handler = PackageHandler(parse_document=extractor.parse)
    result = handler.parse_package(zip_bytes, 'filing.zip')

    if result.error:
        print(f"Bad archive: {result.error}")
    elif result.primary_instance:
        print(f"{result.total_facts} facts in {len(result.instances)} instances")
"""

import io
import logging
import zipfile
import zlib
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

from ...core.config_loader import ConfigLoader
from ..models.parsed_instance import ParsedInstance
from ..package.constants import (
    HIDDEN_PREFIX,
    HIDDEN_PATH_MARKER,
    MACOSX_DIRECTORY,
    PATH_SEPARATORS,
    LINKBASE_SUFFIXES,
    SCHEMA_SUFFIX,
    XML_SUFFIX,
    HTML_SUFFIXES,
    FILING_SUMMARY_NAME,
    REPORT_PAGE_PATTERN,
    INSTANCE_SUFFIXES,
    DATED_INSTANCE_PATTERN,
    INSTANCE_CONTENT_MARKERS,
    INLINE_CONTENT_MARKERS,
    CONTENT_TYPE_HTML,
    CONTENT_TYPE_XHTML,
    CONTENT_TYPE_XML,
    CONTENT_TYPE_OCTET_STREAM,
    DEFAULT_PACKAGE_SNIFF_BYTES,
    DEFAULT_MAX_ARCHIVE_SIZE,
    SNIFF_ENCODING,
)


# parse(content, content_type, source) -> ParsedInstance
DocumentParser = Callable[[bytes, Optional[str], Optional[str]], ParsedInstance]

# Failures reading one member; the archive itself stays usable
_MEMBER_READ_ERRORS = (
    zipfile.BadZipFile,
    zipfile.LargeZipFile,
    RuntimeError,
    NotImplementedError,
    EOFError,
    OSError,
    zlib.error,
)


# ==============================================================================
# MEMBER KIND
# ==============================================================================

class MemberKind(Enum):
    """
    Package member classification.

    Types:
        INSTANCE: Instance document candidate (traditional or inline)
        LINKBASE: Calculation/definition/label/presentation/reference/footnote linkbase
        SCHEMA: Taxonomy schema
        OTHER: Anything else (images, report pages, summaries)
    """
    INSTANCE = "INSTANCE"
    LINKBASE = "LINKBASE"
    SCHEMA = "SCHEMA"
    OTHER = "OTHER"

    def __str__(self) -> str:
        return self.value


def content_type_for(filename: str) -> str:
    """Content type implied by a member's file extension."""
    lower = filename.lower()
    if lower.endswith(('.htm', '.html')):
        return CONTENT_TYPE_HTML
    if lower.endswith('.xhtml'):
        return CONTENT_TYPE_XHTML
    if lower.endswith((XML_SUFFIX, SCHEMA_SUFFIX)):
        return CONTENT_TYPE_XML
    return CONTENT_TYPE_OCTET_STREAM


def is_hidden(name: str) -> bool:
    """Hidden files, hidden directories and macOS resource forks."""
    lower = name.lower()
    return (
        name.startswith(HIDDEN_PREFIX)
        or HIDDEN_PATH_MARKER in name
        or lower.startswith(MACOSX_DIRECTORY)
    )


def base_name(name: str) -> str:
    for separator in PATH_SEPARATORS:
        name = name.rsplit(separator, 1)[-1]
    return name


# ==============================================================================
# RESULT
# ==============================================================================

@dataclass
class PackageResult:
    """
    Result of parsing one filing package.

    Attributes:
        package_uri: Caller-supplied package identifier
        total_files: Members unpacked (directories and hidden members excluded)
        instance_files: Candidate instance members, archive order
        linkbase_files: Linkbase members
        schema_files: Schema members
        other_files: Everything else
        instances: Member name -> ParsedInstance, parse order
        errors: Member name -> error message
        error: Top-level failure (bad archive); None otherwise
    """
    package_uri: Optional[str] = None
    total_files: int = 0
    instance_files: list[str] = field(default_factory=list)
    linkbase_files: list[str] = field(default_factory=list)
    schema_files: list[str] = field(default_factory=list)
    other_files: list[str] = field(default_factory=list)
    instances: dict[str, ParsedInstance] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None

    def has_instances(self) -> bool:
        return bool(self.instances)

    @property
    def primary_file(self) -> Optional[str]:
        """Name of the primary instance: first with facts, else first parsed."""
        for name, instance in self.instances.items():
            if instance.has_usable_data():
                return name
        return next(iter(self.instances), None)

    @property
    def primary_instance(self) -> Optional[ParsedInstance]:
        name = self.primary_file
        return self.instances[name] if name is not None else None

    @property
    def fact_counts(self) -> dict[str, int]:
        return {name: instance.fact_count for name, instance in self.instances.items()}

    @property
    def total_facts(self) -> int:
        return sum(instance.fact_count for instance in self.instances.values())

    def to_dict(self, include_facts: bool = False) -> dict[str, Any]:
        """
        Convert to dictionary for serialization.

        Args:
            include_facts: Include facts, contexts and units of each instance

        Returns:
            Dictionary representation
        """
        return {
            'package_uri': self.package_uri,
            'success': self.success,
            'error': self.error,
            'total_files': self.total_files,
            'instance_files': list(self.instance_files),
            'linkbase_files': list(self.linkbase_files),
            'schema_files': list(self.schema_files),
            'other_files': list(self.other_files),
            'primary_file': self.primary_file,
            'total_facts': self.total_facts,
            'fact_counts': self.fact_counts,
            'errors': dict(self.errors),
            'instances': {
                name: instance.to_dict(include_facts=include_facts)
                for name, instance in self.instances.items()
            },
        }


# ==============================================================================
# HANDLER
# ==============================================================================

class PackageHandler:
    """
    Parses filing packages.

    Example:
        handler = PackageHandler(parse_document=XBRLExtractor().parse)
        result = handler.parse_package(zip_bytes)

        for name, count in result.fact_counts.items():
            print(f"{name}: {count} facts")
    """

    def __init__(self, parse_document: DocumentParser, config: Optional[ConfigLoader] = None):
        """
        Initialize package handler.

        Args:
            parse_document: Single-document parse function
            config: Configuration loader
        """
        self.parse_document = parse_document
        self.config = config or ConfigLoader()
        self.logger = logging.getLogger(__name__)

        self.sniff_bytes = self.config.get('package_sniff_bytes', DEFAULT_PACKAGE_SNIFF_BYTES)
        self.max_archive_size = self.config.get('max_archive_size', DEFAULT_MAX_ARCHIVE_SIZE)

    def parse_package(self, content: Optional[bytes], package_uri: Optional[str] = None) -> PackageResult:
        """
        Unpack and parse a filing package.

        Never raises: a bad archive sets PackageResult.error and a bad
        member is recorded in PackageResult.errors.

        Args:
            content: ZIP archive bytes
            package_uri: Package identifier for the result

        Returns:
            PackageResult
        """
        result = PackageResult(package_uri=package_uri)

        files = self._unpack(content or b'', result)
        if result.error is not None:
            return result
        result.total_files = len(files)

        for name, data in files.items():
            kind = self.classify(name, data)
            if kind == MemberKind.INSTANCE:
                result.instance_files.append(name)
            elif kind == MemberKind.LINKBASE:
                result.linkbase_files.append(name)
            elif kind == MemberKind.SCHEMA:
                result.schema_files.append(name)
            else:
                result.other_files.append(name)

        for name in result.instance_files:
            self._parse_member(name, files[name], content_type_for(name), result)

        if not any(instance.has_usable_data() for instance in result.instances.values()):
            self._fallback_scan(files, result)

        self.logger.info(
            f"Parsed package {package_uri or '<bytes>'}: {result.total_files} files, "
            f"{len(result.instances)} instances, {result.total_facts} facts, "
            f"{len(result.errors)} errors"
        )
        return result

    def parse_file(self, content: bytes, filename: str) -> ParsedInstance:
        """
        Parse one document with a content type derived from its name.

        Args:
            content: Document bytes
            filename: Member or file name

        Returns:
            ParsedInstance
        """
        return self.parse_document(content, content_type_for(filename), filename)

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def classify(self, name: str, content: bytes) -> MemberKind:
        """
        Classify a member by name, then by the markers in its head.

        Linkbases are never instance candidates. FilingSummary.xml and
        R<n>.xml report pages are excluded.
        """
        lower = name.lower()

        if lower.endswith(LINKBASE_SUFFIXES):
            return MemberKind.LINKBASE
        if lower.endswith(SCHEMA_SUFFIX):
            return MemberKind.SCHEMA

        if lower.endswith(XML_SUFFIX):
            base = base_name(lower)
            if base == FILING_SUMMARY_NAME or REPORT_PAGE_PATTERN.match(base):
                return MemberKind.OTHER
            if lower.endswith(INSTANCE_SUFFIXES) or DATED_INSTANCE_PATTERN.search(lower):
                return MemberKind.INSTANCE
            head = self._head(content)
            if self._has_marker(head, INSTANCE_CONTENT_MARKERS) or self._has_marker(head, INLINE_CONTENT_MARKERS):
                return MemberKind.INSTANCE
            return MemberKind.OTHER

        if lower.endswith(HTML_SUFFIXES):
            if self._has_marker(self._head(content), INLINE_CONTENT_MARKERS):
                return MemberKind.INSTANCE
            return MemberKind.OTHER

        return MemberKind.OTHER

    def _head(self, content: bytes) -> str:
        return content[:self.sniff_bytes].decode(SNIFF_ENCODING, errors='ignore').lower()

    @staticmethod
    def _has_marker(head: str, markers: tuple[str, ...]) -> bool:
        return any(marker in head for marker in markers)

    # ------------------------------------------------------------------
    # Unpacking and parsing
    # ------------------------------------------------------------------

    def _unpack(self, content: bytes, result: PackageResult) -> dict[str, bytes]:
        """Readable, visible members in archive order."""
        files: dict[str, bytes] = {}

        try:
            archive = zipfile.ZipFile(io.BytesIO(content))
        except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError, OSError) as e:
            self.logger.error(f"Failed to open package {result.package_uri or '<bytes>'}: {e}", exc_info=True)
            result.error = f"Invalid ZIP archive: {e}"
            return files

        total_size = 0
        with archive:
            for info in archive.infolist():
                name = info.filename
                if info.is_dir() or is_hidden(name):
                    continue

                if total_size + info.file_size > self.max_archive_size:
                    self.logger.warning(f"Package member {name} exceeds the archive size limit; skipped")
                    result.errors[name] = (
                        f"Uncompressed size limit of {self.max_archive_size} bytes exceeded"
                    )
                    continue

                try:
                    data = archive.read(info)
                except _MEMBER_READ_ERRORS as e:
                    self.logger.warning(f"Failed to read package member {name}: {e}")
                    result.errors[name] = f"Failed to read member: {e}"
                    continue

                total_size += len(data)
                files[name] = data

        return files

    def _parse_member(
        self,
        name: str,
        data: bytes,
        content_type: str,
        result: PackageResult
    ) -> Optional[ParsedInstance]:
        try:
            instance = self.parse_document(data, content_type, name)
        except Exception as e:
            self.logger.error(f"Failed to parse package member {name}: {e}", exc_info=True)
            result.errors[name] = str(e)
            return None

        result.instances[name] = instance
        return instance

    def _fallback_scan(self, files: dict[str, bytes], result: PackageResult) -> None:
        """Parse remaining HTML members as HTML until one yields facts."""
        for name, data in files.items():
            if name in result.instances or not name.lower().endswith(HTML_SUFFIXES):
                continue

            self.logger.debug(f"No instance yielded facts; trying {name} as inline HTML")
            try:
                instance = self.parse_document(data, CONTENT_TYPE_HTML, name)
            except Exception as e:
                self.logger.error(f"Failed to parse package member {name}: {e}", exc_info=True)
                result.errors[name] = str(e)
                continue

            if instance.has_usable_data():
                result.instances[name] = instance
                return


__all__ = [
    'MemberKind',
    'PackageResult',
    'PackageHandler',
    'DocumentParser',
    'content_type_for',
    'is_hidden',
]
