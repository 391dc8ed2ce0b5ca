import os
import tempfile
import unittest

from ffnn.core.logger import TrainingLogger


class TestTrainingLogger(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.filename = os.path.join(self.tmp_dir.name, 'training.log')

    def tearDown(self):
        self.tmp_dir.cleanup()

    def read_log(self):
        with open(self.filename) as f:
            return f.read()

    def test_writes_epochs_to_file(self):
        logger = TrainingLogger(filename=self.filename, stdout=False)
        logger.info("hello")
        logger.log_epoch(3, 100, 0.5)
        logger.log_epoch(4, 100, 0.75)
        logger.close()

        contents = self.read_log()

        self.assertIn("hello", contents)
        self.assertIn("(Epoch 003 / 100) error = 0.5 *", contents)
        self.assertIn("(Epoch 004 / 100) error = 0.75\n", contents)

    def test_error_history_and_best_epoch(self):
        logger = TrainingLogger(filename=self.filename, stdout=False)

        for epoch, error in enumerate([0.9, 0.4, 0.6, 0.3, 0.35], 1):
            logger.log_epoch(epoch, 5, error)

        self.assertEqual(logger.errors, [0.9, 0.4, 0.6, 0.3, 0.35])
        self.assertEqual(logger.best_error, 0.3)
        self.assertEqual(logger.best_epoch, 4)

        logger.close()

    def test_start_run_resets_history(self):
        logger = TrainingLogger(filename=self.filename, stdout=False)

        logger.start_run("<Trainer>", 4, 10)
        logger.log_epoch(1, 10, 0.2)
        logger.start_run("<Trainer>", 4, 10)
        logger.close()

        self.assertEqual(logger.n_runs, 2)
        self.assertEqual(logger.errors, [])
        self.assertIsNone(logger.best_error)
        self.assertIsNone(logger.best_epoch)

        contents = self.read_log()
        self.assertIn(
            "Run 1: training <Trainer> on 4 samples for at most 10 epochs",
            contents)
        self.assertIn("Run 2:", contents)

    def test_stdout_handler(self):
        logger = TrainingLogger(filename=self.filename, stdout=True)
        self.assertEqual(len(logger.handlers), 2)
        logger.close()

        self.assertEqual(len(logger.handlers), 0)


if __name__ == '__main__':
    unittest.main()
