"""
phpfix Server - apply PHP fixers over HTTP
"""

import os
import queue
import threading
import uuid
from datetime import datetime
from pathlib import Path
from typing import Dict

from flask import Flask, request, jsonify

from phpfix_core.fixers.fixer_factory import FixerFactory
from phpfix_core.fix_processor import FixProcessor
from phpfix_core.result import Result, ResultStatus
from phpfix_core import logger

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = 16 * 1024 * 1024  # 16MB max request size

# Global queue for background fix jobs
job_queue = queue.Queue()
results: Dict[str, Result] = {}  # Store results by job id

CONFIG = {
    'workspace': Path(os.environ.get('PHPFIX_WORKSPACE', '.')).resolve(),
}


class FixJob:
    def __init__(self, id: str, paths, fixer_ids=None, dry_run: bool = False):
        if not paths:
            raise ValueError("paths is required")

        self.id = id
        self.paths = [Path(p) for p in paths]
        self.fixer_ids = fixer_ids
        self.dry_run = dry_run
        self.timestamp = datetime.now().isoformat()


def _resolve_path(path: str) -> Path:
    """Relative job paths are taken relative to the workspace."""
    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = CONFIG['workspace'] / candidate
    return candidate


def process_job(job: FixJob) -> Result:
    try:
        processor = FixProcessor(fixer_ids=job.fixer_ids)
        return processor.fix_paths(job.paths, dry_run=job.dry_run)
    except Exception as e:
        logger.exception(f"Error processing job {job.id}: {e}")
        return Result(status=ResultStatus.ERROR, message=str(e))


def job_worker():
    """Worker thread for processing fix jobs"""
    while True:
        try:
            job = job_queue.get(timeout=1)
        except queue.Empty:
            continue

        results[job.id] = Result(
            status=ResultStatus.PROCESSING,
            message='Starting fix job...'
        )
        results[job.id] = process_job(job)
        job_queue.task_done()


worker_thread = threading.Thread(target=job_worker, daemon=True)
worker_thread.start()


def _validate_fixer_ids(fixer_ids):
    if fixer_ids is None:
        return None
    if not isinstance(fixer_ids, list) or not all(isinstance(f, str) for f in fixer_ids):
        return 'fixers must be a list of fixer ids'
    known = {fixer['id'] for fixer in FixerFactory.get_available_fixers()}
    unknown = [fixer_id for fixer_id in fixer_ids if fixer_id not in known]
    if unknown:
        return f"Unsupported fixer: {', '.join(unknown)}"
    return None


@app.route('/api/available/fixers')
def get_available_fixers():
    """Get list of available fixers"""
    return jsonify(FixerFactory.get_available_fixers())


@app.route('/api/fixers/<fixer_id>')
def get_fixer(fixer_id):
    """Get the definition of a single fixer"""
    try:
        fixer = FixerFactory.from_id(fixer_id)
    except ValueError as e:
        return jsonify({'error': str(e)}), 404
    return jsonify(fixer.get_metadata())


@app.route('/api/fix', methods=['POST'])
def fix_code():
    """Fix a PHP snippet and return the result synchronously"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    code = data.get('code')
    if not isinstance(code, str):
        return jsonify({'error': 'code is required'}), 400

    fixer_ids = data.get('fixers')
    error = _validate_fixer_ids(fixer_ids)
    if error:
        return jsonify({'error': error}), 400

    processor = FixProcessor(fixer_ids=fixer_ids)
    fixed = processor.fix_code(code)
    return jsonify({'code': fixed, 'changed': fixed != code})


@app.route('/api/jobs', methods=['POST'])
def submit_job():
    """Submit files or directories for fixing in the background"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    paths = data.get('paths')
    if not paths or not isinstance(paths, list) or not all(isinstance(p, str) and p for p in paths):
        return jsonify({'error': 'paths must be a non-empty list of paths'}), 400

    fixer_ids = data.get('fixers')
    error = _validate_fixer_ids(fixer_ids)
    if error:
        return jsonify({'error': error}), 400

    job = FixJob(
        id=str(uuid.uuid4()),
        paths=[_resolve_path(p) for p in paths],
        fixer_ids=fixer_ids,
        dry_run=bool(data.get('dry_run', False))
    )

    results[job.id] = Result(
        status=ResultStatus.QUEUED,
        message='Job queued for processing'
    )
    job_queue.put(job)

    return jsonify({
        'id': job.id,
        'paths': [str(p) for p in job.paths],
        'fixers': fixer_ids,
        'dry_run': job.dry_run,
        'timestamp': job.timestamp
    })


@app.route('/api/jobs/<job_id>/status')
def get_job_status(job_id):
    """Get the status of a specific job"""
    if job_id in results:
        return jsonify(results[job_id].to_dict())
    return jsonify({'status': 'not_found'}), 404


@app.route('/api/queue/status')
def get_queue_status():
    """Get overall queue status"""
    return jsonify({
        'queue_size': job_queue.qsize(),
        'results': {k: v.to_dict() for k, v in results.items()},
        'timestamp': datetime.now().isoformat()
    })


if __name__ == '__main__':
    app.run(debug=True, host='127.0.0.1', port=5000)
