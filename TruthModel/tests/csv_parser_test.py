import os
import shutil
import tempfile
import unittest

from TruthModel.csv_parser import load_preferences, load_qrel, question_key

HEADER = "research_task,topic,topic_id,assn_status,worker_id,left_doc,right_doc,result\n"


class TestLoadPreferences(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp(prefix='prefs_test_')

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def _create_csv(self, content: str, filename="prefs.csv") -> str:
        path = os.path.join(self.test_dir, filename)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
        return path

    def test_question_key_is_sorted(self):
        self.assertEqual(question_key("d2", "d1"), ("d1", "d1 d2"))
        self.assertEqual(question_key("d1", "d2"), ("d1", "d1 d2"))

    def test_filters_and_orientation(self):
        path = self._create_csv(HEADER + "\n".join([
            "rt1,apples,101,Approved,w1,d1,d2,win",
            "rt1,apples,101,Approved,w2,d2,d1,win",
            "rt1,apples,101,Approved,w3,d1,d2,win",
            "rt1,apples,101,Rejected,w4,d1,d2,win",
            "rt1,apples,101,Approved,w5,d1,d2,tie",
            "rt2,apples,101,Approved,w6,d1,d2,win",
            "rt1,pears,102,Approved,w7,d1,d2,win",
        ]) + "\n")
        prefs = load_preferences(path, "rt1", "apples")

        self.assertEqual(prefs.topic_id, "101")
        self.assertEqual(prefs.judgments, [
            ("d1 d2", "w1", True),
            ("d1 d2", "w2", False),
            ("d1 d2", "w3", True),
        ])
        self.assertEqual(prefs.majority, {"d1 d2": 1})
        self.assertEqual((prefs.num_pos, prefs.num_neg), (2, 1))

    def test_unknown_topic(self):
        path = self._create_csv(HEADER + "rt1,apples,101,Approved,w1,d1,d2,win\n")
        prefs = load_preferences(path, "rt1", "kiwis")
        self.assertEqual(prefs.topic_id, "")
        self.assertEqual(prefs.judgments, [])

    def test_missing_fields(self):
        path = self._create_csv("topic,worker_id\napples,w1\n")
        with self.assertRaisesRegex(ValueError, "research_task"):
            load_preferences(path, "rt1", "apples")

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_preferences(os.path.join(self.test_dir, "nope.csv"), "rt1", "apples")


class TestLoadQrel(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp(prefix='qrel_test_')
        self.path = os.path.join(self.test_dir, "qrels.txt")

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_reads_topic_only(self):
        with open(self.path, 'w') as f:
            f.write("101 0 d1 1\n101 0 d2 0\n\n102 0 d1 0\n")
        self.assertEqual(load_qrel(self.path, "101"), {"d1": 1, "d2": 0})
        self.assertEqual(load_qrel(self.path, "103"), {})

    def test_rejects_malformed_lines(self):
        with open(self.path, 'w') as f:
            f.write("101 0 d1 1\n101 d2 0\n")
        with self.assertRaisesRegex(ValueError, ":2:"):
            load_qrel(self.path, "101")


if __name__ == '__main__':
    unittest.main()
