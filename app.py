#!/usr/bin/env python3
"""
Flask Web Application for Tekton Artifact Performance Analysis
Provides a REST API for analyzing PipelineRun, TaskRun and Pod lists.
"""

from flask import Flask, request, jsonify
from werkzeug.utils import secure_filename
import os
import shutil
import tempfile
from tapa import AnalysisConfig, InputAccessError, RunAnalyzer
from tapa.core.types import KIND_CONTAINER, KIND_PIPELINE_RUN, KIND_POD, KIND_TASK_RUN
from tapa.web import prepare_results

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = 500 * 1024 * 1024
app.config['UPLOAD_FOLDER'] = tempfile.gettempdir()

ALLOWED_EXTENSIONS = {'json'}

# analysis -> (kind, required upload field)
FLAT_ANALYSES = {
    'prlist': (KIND_PIPELINE_RUN, 'pipelineruns'),
    'trlist': (KIND_TASK_RUN, 'taskruns'),
    'podlist': (KIND_POD, 'pods'),
    'containerlist': (KIND_CONTAINER, 'pods'),
}
HIERARCHY_FIELDS = ('pipelineruns', 'taskruns', 'pods')


def allowed_file(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def save_upload(field, upload_dir):
    """Save one uploaded file; returns its path or raises ValueError."""
    file = request.files.get(field)
    if file is None or not file.filename:
        raise ValueError(f"No '{field}' file provided")
    if not allowed_file(file.filename):
        raise ValueError(f"Invalid file type for '{field}'. Only JSON files are allowed.")
    
    filepath = os.path.join(upload_dir, f"{field}-{secure_filename(file.filename)}")
    file.save(filepath)
    return filepath


@app.route('/api/health')
def health():
    return jsonify({'status': 'ok'})


@app.route('/api/analyze', methods=['POST'])
def analyze_api():
    """
    API endpoint to analyze Tekton object lists.
    Accepts: multipart/form-data with fields:
      - 'analysis': 'prlist'|'trlist'|'podlist'|'containerlist'|'all' (default: 'all')
      - 'pipelineruns', 'taskruns', 'pods': JSON list files, as the analysis requires
      - 'mode': 'chained'|'independent' (optional, 'all' only, default: 'chained')
      - 'scope': namespace:name or key prefix (optional)
      - 'include_unlabeled_pods': 'true'|'false' (optional, default: 'false')
    Returns: JSON with analysis results
    """
    analysis = request.form.get('analysis', 'all')
    if analysis != 'all' and analysis not in FLAT_ANALYSES:
        return jsonify({'error': f"Unknown analysis '{analysis}'"}), 400
    
    try:
        config = AnalysisConfig(
            require_owner_label=request.form.get('include_unlabeled_pods', 'false').lower() != 'true',
            scope=request.form.get('scope') or None,
            hierarchy_mode=request.form.get('mode', 'chained'),
            verbose=False
        )
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    
    upload_dir = tempfile.mkdtemp(dir=app.config['UPLOAD_FOLDER'])
    try:
        analyzer = RunAnalyzer(config)
        if analysis == 'all':
            paths = [save_upload(field, upload_dir) for field in HIERARCHY_FIELDS]
            report = analyzer.process_hierarchy_files(*paths)
        else:
            kind, field = FLAT_ANALYSES[analysis]
            report = analyzer.process_files(kind, save_upload(field, upload_dir))
        
        return jsonify(prepare_results(report))
    
    except ValueError as e:
        return jsonify({'error': str(e)}), 400
    except InputAccessError as e:
        return jsonify({'error': str(e)}), 400
    except Exception as e:
        return jsonify({'error': str(e)}), 500
    finally:
        shutil.rmtree(upload_dir, ignore_errors=True)


if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=5001)
