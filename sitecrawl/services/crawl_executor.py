import logging
import queue
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from sitecrawl.domain.crawl_context import CrawlContext
from sitecrawl.domain.crawl_error import CrawlError
from sitecrawl.domain.crawl_result import CrawlResult
from sitecrawl.domain.crawl_task import CrawlTask
from sitecrawl.domain.outstanding_tasks import OutstandingTasks
from sitecrawl.exceptions import CrawlStageError, HttpStatusError, UrlParseError
from sitecrawl.services.link_processor import ProcessedLinks
from sitecrawl.services.result_sink import OutputStream, ResultSink

logger = logging.getLogger(__name__)


class CrawlRun:
    """Handle for one running crawl.

    Holds the frontier queue, the outstanding-task counter and the output
    streams. Callers may iterate `results` while the crawl is in progress;
    the iteration ends once every task has finished.
    """

    def __init__(self, context: CrawlContext, sink: ResultSink, workers: int, stop_event: Optional[threading.Event] = None):
        self.context = context
        self.sink = sink
        self.stop_event = stop_event
        self.outstanding = OutstandingTasks()
        self.frontier: "queue.Queue[Optional[CrawlTask]]" = queue.Queue()
        self._workers = workers

    @property
    def results(self) -> OutputStream[str]:
        return self.sink.results

    @property
    def errors(self) -> OutputStream[CrawlError]:
        return self.sink.errors

    def schedule(self, task: CrawlTask) -> None:
        # Count first so the crawl cannot look finished while the task is queued.
        self.outstanding.add()
        self.frontier.put(task)

    def task_done(self) -> None:
        if self.outstanding.done():
            logger.info("Crawl of %s complete: %d URLs claimed", self.context.seed_url, len(self.context.visited))
            self.sink.close()
            for _ in range(self._workers):
                self.frontier.put(None)

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self.outstanding.wait(timeout)

    def result(self) -> CrawlResult:
        """Wait for completion and return whatever is left in both streams."""
        self.wait()
        return CrawlResult(
            results=list(self.results),
            errors=list(self.errors),
            dropped_results=self.results.dropped,
        )


class CrawlExecutor:
    """Executes a crawl given configured collaborators.

    This class owns the crawl control-flow (task scheduling, depth/scope/
    visited checks, rate-limited fetch, delegating link processing and
    completion detection). It intentionally does NOT construct dependencies
    (that stays in the DI layer).

    Tasks are pulled from a frontier queue by `max_workers` threads, so the
    number of in-flight fetches does not grow with the pages' fan-out.
    """

    def __init__(
        self,
        *,
        fetcher,
        rate_limiter,
        link_processor,
        crawl_policy,
        max_workers: int = 8,
        result_buffer_size: Optional[int] = None,
    ):
        self.fetcher = fetcher
        self.rate_limiter = rate_limiter
        self.link_processor = link_processor
        self.crawl_policy = crawl_policy
        self.max_workers = max(1, int(max_workers))
        self.result_buffer_size = result_buffer_size

    def _buffer_size_for(self, context: CrawlContext) -> Optional[int]:
        # Sized to the visited cap by default, a result can never be dropped.
        if self.result_buffer_size is not None:
            return self.result_buffer_size
        return context.max_visited

    def start(self, context: CrawlContext, stop_event: Optional[threading.Event] = None) -> CrawlRun:
        """Schedule the seed task and start the worker pool; returns immediately."""
        if context is None:
            raise ValueError("context is required for crawl")

        run = CrawlRun(
            context,
            ResultSink(self._buffer_size_for(context)),
            workers=self.max_workers,
            stop_event=stop_event,
        )
        run.schedule(CrawlTask(context.seed_url, 1))

        pool = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="sitecrawl")
        for _ in range(self.max_workers):
            pool.submit(self._work, run)
        # Workers exit on their own once the crawl completes.
        pool.shutdown(wait=False)
        logger.info(
            "Crawl started: %s (max_depth=%s, max_visited=%s, workers=%s)",
            context.seed_url,
            context.max_depth,
            context.max_visited,
            self.max_workers,
        )
        return run

    def crawl(self, context: CrawlContext, stop_event: Optional[threading.Event] = None) -> CrawlResult:
        """Run a crawl to completion and return both drained streams."""
        return self.start(context, stop_event).result()

    def _work(self, run: CrawlRun) -> None:
        while True:
            task = run.frontier.get()
            if task is None:
                return
            try:
                self.process_task(task, run)
            except Exception as e:
                # Keep the worker alive and the counter balanced whatever happens.
                logger.error("Unexpected error crawling %s: %s", task.url, e, exc_info=True)
                run.sink.emit_error(CrawlError("internal", task.url, f"unexpected error for {task.url}: {e}", e))
            finally:
                run.task_done()

    def _record(self, run: CrawlRun, error: CrawlStageError) -> None:
        logger.warning("%s", error)
        run.sink.emit_error(CrawlError.from_exception(error))

    def process_task(self, task: CrawlTask, run: CrawlRun) -> None:
        context = run.context
        if self.crawl_policy.should_skip_due_to_depth(task, context):
            return

        try:
            url = self.crawl_policy.canonicalize(task.url, context)
            if url is None:
                return
            if self.crawl_policy.should_skip_due_to_scope(url, context):
                return
        except UrlParseError as e:
            self._record(run, e)
            return
        except ValueError as e:
            self._record(run, UrlParseError(task.url, e))
            return

        if not context.claim(url):
            logger.debug("Skipping (visited or cap reached) %s", url)
            return

        try:
            self.rate_limiter.acquire(run.stop_event, url)
            links = self.fetch_and_extract(url, context)
        except CrawlStageError as e:
            self._record(run, e)
            return

        run.sink.emit_result(url)
        for error in links.errors:
            run.sink.emit_error(error)
        for target in links.targets:
            run.schedule(task.child(target))

    def fetch_and_extract(self, url: str, context: CrawlContext) -> ProcessedLinks:
        """Fetch `url` and return its in-scope links.

        Raises HttpFetchError, HttpStatusError or MarkupParseError.
        """
        response = self.fetcher.fetch(url, referer=context.seed_url)
        try:
            logger.info("Fetched %s -> status %s", url, response.status_code)
            if not response.ok:
                raise HttpStatusError(url, response.status_code, response.reason)
            return self.link_processor.process(url, response.body, context)
        finally:
            response.close()
