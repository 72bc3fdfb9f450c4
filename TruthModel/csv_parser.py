"""
Loading pairwise document preferences and TREC-style relevance judgments.

A preference CSV holds one worker judgment per row: the worker saw two
documents for a topic and picked one.  Each unordered document pair becomes
one question, keyed "small big" with the ids in sorted order, and the
judgment becomes the boolean "the first document of the key won".
"""

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple, Union

logger = logging.getLogger(__name__)

FIELD_TASK = "research_task"
FIELD_TOPIC = "topic"
FIELD_TOPIC_ID = "topic_id"
FIELD_STATUS = "assn_status"
FIELD_WORKER = "worker_id"
FIELD_LEFT_DOC = "left_doc"
FIELD_RIGHT_DOC = "right_doc"
FIELD_RESULT = "result"
REQUIRED_FIELDS = (FIELD_TASK, FIELD_TOPIC, FIELD_TOPIC_ID, FIELD_STATUS,
                   FIELD_WORKER, FIELD_LEFT_DOC, FIELD_RIGHT_DOC, FIELD_RESULT)

STATUS_APPROVED = "Approved"
RESULT_WIN = "win"

Judgment = Tuple[str, str, bool]


@dataclass
class Preferences:
    topic_id: str = ""
    judgments: List[Judgment] = field(default_factory=list)
    # net votes per question: +1 when the first document won, -1 otherwise
    majority: Dict[str, int] = field(default_factory=dict)
    num_pos: int = 0
    num_neg: int = 0


def question_key(doc1: str, doc2: str) -> Tuple[str, str]:
    small, big = sorted((doc1, doc2))
    return small, f"{small} {big}"


def load_preferences(path: Union[str, Path], task: str, topic: str) -> Preferences:
    """
    Judgments of *topic* under *task* that were approved and have a winner.
    Raises ValueError when the header lacks one of the expected fields.
    """
    prefs = Preferences()
    with Path(path).open("r", newline="", encoding="utf-8-sig") as handle:
        reader = csv.DictReader(handle)
        missing = [f for f in REQUIRED_FIELDS if f not in (reader.fieldnames or [])]
        if missing:
            raise ValueError(f"{path}: missing CSV fields {', '.join(missing)}")
        rows = list(reader)

    for row in rows:
        if row[FIELD_TOPIC] == topic:
            prefs.topic_id = row[FIELD_TOPIC_ID]
            break

    for row in rows:
        if (row[FIELD_TASK] != task or row[FIELD_TOPIC] != topic
                or row[FIELD_STATUS] != STATUS_APPROVED or row[FIELD_RESULT] != RESULT_WIN):
            continue
        winner = row[FIELD_LEFT_DOC]
        small, question = question_key(winner, row[FIELD_RIGHT_DOC])
        is_lt = small == winner
        if is_lt:
            prefs.num_pos += 1
        else:
            prefs.num_neg += 1
        prefs.majority[question] = prefs.majority.get(question, 0) + (1 if is_lt else -1)
        prefs.judgments.append((question, row[FIELD_WORKER], is_lt))

    logger.info(f"Loaded {len(prefs.judgments)} judgments of {len(prefs.majority)} "
                f"questions for topic {topic} ({prefs.topic_id or 'no id'})")
    return prefs


def load_qrel(path: Union[str, Path], topic_id: str) -> Dict[str, int]:
    """
    Relevance of each document for *topic_id* from a QREL file of lines
    "topic iteration document relevance".
    """
    qrel: Dict[str, int] = {}
    with Path(path).open("r", newline="") as handle:
        reader = csv.reader(handle, delimiter=" ")
        for line_num, record in enumerate(reader, 1):
            if not record:
                continue
            if len(record) != 4:
                raise ValueError(f"{path}:{line_num}: expected 4 fields, got {len(record)}")
            if record[0] == topic_id:
                qrel[record[2]] = int(record[3])
    logger.info(f"Found assessments for {len(qrel)} documents")
    return qrel
