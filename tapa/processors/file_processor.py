"""
Reading of Kubernetes list files using streaming parser.
"""

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

import ijson

from ..core.errors import InputAccessError, RecordDecodeError
from ..core.types import RunRecord
from ..extractors.record_decoder import RecordDecoder


@dataclass
class LoadResult:
    """Records read from one input path, with counts of what was left out."""
    kind: str
    records: List[RunRecord] = field(default_factory=list)
    sources: List[str] = field(default_factory=list)
    skipped_documents: List[str] = field(default_factory=list)
    skipped_records: int = 0
    dropped_records: int = 0
    
    @property
    def is_complete(self) -> bool:
        """False if any document or record had to be skipped as malformed."""
        return not self.skipped_documents and self.skipped_records == 0


class RecordFileProcessor:
    """Reads PipelineRun, TaskRun and Pod lists from files or directory trees."""
    
    def __init__(self, verbose: bool = True):
        """
        Args:
            verbose: If True, progress lines are printed to stderr
        """
        self.verbose = verbose
    
    def _log(self, message: str) -> None:
        if self.verbose:
            print(message, file=sys.stderr)
    
    @staticmethod
    def collect_files(path: str) -> List[Path]:
        """
        Resolve an input path to the files to read.
        
        Args:
            path: A JSON file or a directory walked recursively for *.json files
            
        Returns:
            Files in sorted order
            
        Raises:
            InputAccessError: If the path does not exist
        """
        root = Path(path)
        if root.is_dir():
            return sorted(p for p in root.rglob('*.json') if p.is_file())
        if root.is_file():
            return [root]
        raise InputAccessError(str(path), 'no such file or directory')
    
    @staticmethod
    def _decode_items(items, kind: str) -> Tuple[List[RunRecord], int, int, int]:
        """Decode streamed items; returns (records, seen, skipped, dropped)."""
        records = []
        seen = skipped = dropped = 0
        for item in items:
            seen += 1
            try:
                record = RecordDecoder.decode(item, kind)
            except RecordDecodeError:
                skipped += 1
                continue
            if record is None:
                dropped += 1
            else:
                records.append(record)
        return records, seen, skipped, dropped
    
    def read_document(self, file_path: Path, kind: str) -> Tuple[List[RunRecord], int, int]:
        """
        Read one JSON document: a list of objects or a single object.
        
        Args:
            file_path: File to read
            kind: Expected record kind
            
        Returns:
            Tuple of (records, skipped_records, dropped_records)
            
        Raises:
            InputAccessError: If the file cannot be opened or read
            ijson.JSONError: If the document is not valid JSON
        """
        try:
            with open(file_path, 'rb') as f:
                records, seen, skipped, dropped = self._decode_items(ijson.items(f, 'items.item'), kind)
                if seen:
                    return records, skipped, dropped
                
                # Not a list document: take the whole thing as one object
                f.seek(0)
                document = next(ijson.items(f, ''), None)
                if not isinstance(document, dict) or 'items' in document:
                    return [], 0, 0
                records, _, skipped, dropped = self._decode_items([document], kind)
                return records, skipped, dropped
        except OSError as e:
            raise InputAccessError(str(file_path), e.strerror or str(e)) from e
    
    def load(self, path: str, kind: str) -> LoadResult:
        """
        Load every record of one kind from a file or directory.
        
        Malformed documents and records are skipped and counted; records of
        another kind are dropped. Any unreadable input aborts the load.
        
        Args:
            path: File or directory path
            kind: Expected record kind (PipelineRun, TaskRun or Pod)
            
        Returns:
            LoadResult with the decoded records
            
        Raises:
            InputAccessError: If the path or any file under it cannot be read
        """
        result = LoadResult(kind=kind)
        
        self._log(f"Processing {path}...")
        for file_path in self.collect_files(path):
            try:
                records, skipped, dropped = self.read_document(file_path, kind)
            except ijson.JSONError:
                result.skipped_documents.append(str(file_path))
                continue
            result.sources.append(str(file_path))
            result.records.extend(records)
            result.skipped_records += skipped
            result.dropped_records += dropped
        
        skipped_total = result.skipped_records + len(result.skipped_documents)
        self._log(f"Completed reading {path}: {len(result.records)} {kind} records ({skipped_total} skipped).")
        return result
