import logging
import os


DEFAULT_LOG_FILENAME = 'ffnn-log.txt'


class TrainingLogger(logging.Logger):
    """ A logger for training runs. Messages go to a file and, optionally,
    to standard error.

    Pass an instance to a learning algorithm: every call to `learn` opens
    a new run (:meth:`start_run`) and each epoch is reported through
    :meth:`log_epoch`, which also keeps the error history of the run.
    """
    def __init__(self, filename=None, stdout=True, level=logging.DEBUG):
        """
        Parameters
        ----------
        filename: str, default=None
            The log file (overwritten). Defaults to `ffnn-log.txt` in the
            working directory.

        stdout: bool, default=True
            Also write to standard error.

        level: int, default=logging.DEBUG

        """
        logging.Logger.__init__(self, 'ffnn.training')
        self.setLevel(level)

        self.filename = filename or os.path.join(os.path.curdir,
                                                 DEFAULT_LOG_FILENAME)

        formatter = logging.Formatter(
            fmt='[%(asctime)s] %(levelname)-8s %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S')

        handlers = [logging.FileHandler(self.filename, mode='w')]
        if stdout:
            handlers.append(logging.StreamHandler())

        for handler in handlers:
            handler.setFormatter(formatter)
            self.addHandler(handler)

        self.n_runs = 0
        self.errors = []
        self.best_error = None
        self.best_epoch = None

    def start_run(self, description, n_samples, max_epochs):
        """ Forget the error history and announce a new training run
        """
        self.n_runs += 1
        self.errors = []
        self.best_error = None
        self.best_epoch = None

        msg = "Run {}: training {} on {} samples for at most {} epochs"
        self.info(msg.format(self.n_runs, description, n_samples, max_epochs))

    def log_epoch(self, epoch, max_epochs, error):
        """ Record the total error of an epoch and report it as, e.g.,
        `(Epoch 007 / 100) error = 0.0412`. Epochs that improve on the best
        error of the run so far are flagged.
        """
        self.errors.append(error)

        improved = self.best_error is None or error < self.best_error
        if improved:
            self.best_error = error
            self.best_epoch = epoch

        width = len(str(max_epochs))
        msg = "(Epoch {:0{width}d} / {}) error = {:.6g}{}".format(
            epoch, max_epochs, error, " *" if improved else "", width=width)
        self.info(msg)

    def close(self):
        """ Close and detach every handler (releases the log file)
        """
        for handler in list(self.handlers):
            handler.close()
            self.removeHandler(handler)
