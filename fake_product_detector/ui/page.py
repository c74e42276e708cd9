from __future__ import annotations

import json
from typing import Any, Dict, List

PAGE_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Fake Product Detector</title>
    <style>
        body {
            font-family: Arial, sans-serif;
            margin: 0;
            padding: 0;
            background: linear-gradient(135deg, #eff6ff, #e0e7ff);
            color: #1f2430;
            min-height: 100vh;
        }
        header {
            text-align: center;
            padding: 32px 24px 8px;
        }
        h1 {
            margin: 0 0 8px;
            font-size: 36px;
        }
        header p {
            color: #4b5563;
            margin: 4px 0;
        }
        main {
            max-width: 960px;
            margin: 0 auto;
            padding: 24px;
        }
        .grid {
            display: grid;
            grid-template-columns: repeat(auto-fit, minmax(320px, 1fr));
            gap: 24px;
        }
        .panel {
            background: #fff;
            border-radius: 8px;
            padding: 16px;
            margin-bottom: 24px;
            box-shadow: 0 2px 6px rgba(0,0,0,0.08);
        }
        .panel h2 {
            margin-top: 0;
            font-size: 20px;
        }
        .muted {
            color: #6b7280;
            font-size: 14px;
        }
        .dropzone {
            border: 2px dashed #d1d5db;
            border-radius: 8px;
            padding: 32px;
            text-align: center;
            transition: background 0.2s, border-color 0.2s;
        }
        .dropzone.active {
            border-color: #3b82f6;
            background: #eff6ff;
        }
        .dropzone img {
            max-height: 256px;
            max-width: 100%;
            border-radius: 8px;
            box-shadow: 0 2px 6px rgba(0,0,0,0.15);
        }
        button, .button {
            display: inline-block;
            padding: 8px 16px;
            border-radius: 6px;
            border: 1px solid #d1d5db;
            background: #fff;
            cursor: pointer;
            font-size: 14px;
        }
        button.primary {
            background: #2563eb;
            border-color: #2563eb;
            color: #fff;
        }
        button:disabled {
            opacity: 0.6;
            cursor: not-allowed;
        }
        .actions {
            display: flex;
            gap: 8px;
            justify-content: center;
            margin-top: 16px;
        }
        .alert {
            margin-top: 16px;
            padding: 12px;
            border-radius: 6px;
            background: #fef2f2;
            border: 1px solid #fecaca;
            color: #b91c1c;
        }
        .badge {
            display: inline-block;
            padding: 6px 16px;
            border-radius: 16px;
            font-size: 18px;
            font-weight: bold;
        }
        .badge.real { background: #dcfce7; color: #166534; }
        .badge.fake { background: #fee2e2; color: #b91c1c; }
        .summary {
            text-align: center;
            padding: 24px;
            border-radius: 8px;
            background: #f9fafb;
        }
        .confidence {
            font-size: 24px;
            font-weight: bold;
            margin: 12px 0 8px;
        }
        .progress {
            height: 8px;
            background: #e5e7eb;
            border-radius: 4px;
            max-width: 320px;
            margin: 0 auto;
            overflow: hidden;
        }
        .progress div {
            height: 100%;
            background: #2563eb;
        }
        .reasoning {
            background: #f9fafb;
            padding: 12px;
            border-radius: 6px;
            font-size: 14px;
            color: #4b5563;
        }
        ul.cues li::marker { color: #3b82f6; }
        ul.risks li::marker { color: #ef4444; }
        h4.risks { color: #dc2626; }
        .steps {
            display: grid;
            grid-template-columns: repeat(auto-fit, minmax(200px, 1fr));
            gap: 24px;
            text-align: center;
            font-size: 14px;
        }
        .hidden { display: none; }
    </style>
</head>
<body>
    <header>
        <h1>Fake Product Detector</h1>
        <p>Upload a product image to verify its authenticity using AI</p>
        <label class="muted">
            <input type="checkbox" id="demo-mode" />
            Demo Mode (works without OpenAI API)
        </label>
    </header>
    <main>
        <div class="grid">
            <section class="panel">
                <h2>Upload Product Image</h2>
                <p class="muted">Drag and drop an image or click to select (max __MAX_IMAGE_MB__MB)</p>
                <div class="dropzone" id="dropzone">
                    <div id="empty-state">
                        <p><strong>Drop your image here</strong></p>
                        <p class="muted">or click to browse</p>
                        <input type="file" accept="image/*" id="file-upload" class="hidden" />
                        <label for="file-upload" class="button">Select Image</label>
                    </div>
                    <div id="preview-state" class="hidden">
                        <img id="preview" alt="Selected product" />
                        <div class="actions">
                            <button id="remove-button">Remove</button>
                            <button id="analyze-button" class="primary">Analyze Product</button>
                        </div>
                    </div>
                </div>
                <div id="error" class="alert hidden"></div>
            </section>
            <section class="panel">
                <h2>Analysis Results</h2>
                <p class="muted">AI-powered authenticity assessment</p>
                <div id="result"></div>
            </section>
        </div>
        <section class="panel">
            <h2>How It Works</h2>
            <div class="steps">
                __STEPS__
            </div>
        </section>
    </main>
    <script>
        const ENDPOINTS = __ENDPOINTS__;

        const state = {
            selectedImage: null,
            preview: null,
            analyzing: false,
            result: null,
            error: null,
            dragActive: false,
            demoMode: false,
        };

        function escapeHtml(value) {
            const div = document.createElement('div');
            div.textContent = String(value);
            return div.innerHTML;
        }

        function selectImage(file) {
            if (!file || !file.type || !file.type.startsWith('image/')) {
                return;
            }
            state.selectedImage = file;
            state.result = null;
            state.error = null;
            const reader = new FileReader();
            reader.onload = (event) => {
                state.preview = event.target.result;
                render();
            };
            reader.readAsDataURL(file);
            render();
        }

        function handleDrag(event) {
            event.preventDefault();
            event.stopPropagation();
            if (event.type === 'dragenter' || event.type === 'dragover') {
                state.dragActive = true;
            } else if (event.type === 'dragleave') {
                state.dragActive = false;
            }
            render();
        }

        function handleDrop(event) {
            event.preventDefault();
            event.stopPropagation();
            state.dragActive = false;
            const files = event.dataTransfer && event.dataTransfer.files;
            if (files && files[0]) {
                selectImage(files[0]);
            }
            render();
        }

        async function analyzeImage() {
            if (!state.selectedImage || state.analyzing) {
                return;
            }
            state.analyzing = true;
            state.error = null;
            render();
            try {
                const formData = new FormData();
                formData.append('image', state.selectedImage);
                const endpoint = state.demoMode ? ENDPOINTS.demo : ENDPOINTS.live;
                const response = await fetch(endpoint, { method: 'POST', body: formData });
                if (!response.ok) {
                    const errorData = await response.json().catch(() => ({ error: 'Unknown error occurred' }));
                    throw new Error(errorData.error || `HTTP ${response.status}: ${response.statusText}`);
                }
                state.result = await response.json();
                state.error = null;
            } catch (err) {
                state.error = err instanceof Error ? err.message : 'Failed to analyze image. Please try again.';
            } finally {
                state.analyzing = false;
                render();
            }
        }

        function removeImage() {
            state.selectedImage = null;
            state.preview = null;
            state.result = null;
            document.getElementById('file-upload').value = '';
            render();
        }

        function downloadReport() {
            if (!state.result || !state.selectedImage) {
                return;
            }
            const report = {
                timestamp: new Date().toISOString(),
                filename: state.selectedImage.name,
                prediction: state.result.prediction,
                confidence: state.result.confidence,
                reasoning: state.result.reasoning,
                details: state.result.details,
            };
            const blob = new Blob([JSON.stringify(report, null, 2)], { type: 'application/json' });
            const url = URL.createObjectURL(blob);
            const link = document.createElement('a');
            link.href = url;
            link.download = `product-analysis-${Date.now()}.json`;
            document.body.appendChild(link);
            link.click();
            document.body.removeChild(link);
            URL.revokeObjectURL(url);
        }

        function renderList(title, items, kind) {
            if (!items || !items.length) {
                return '';
            }
            return `<h4 class="${kind}">${title}</h4><ul class="${kind}">`
                + items.map(item => `<li>${escapeHtml(item)}</li>`).join('')
                + '</ul>';
        }

        function renderResult() {
            const container = document.getElementById('result');
            const result = state.result;
            if (!result) {
                container.innerHTML = '<p class="muted" style="text-align:center;padding:48px 0">Upload and analyze an image to see results</p>';
                return;
            }
            const isReal = result.prediction === 'Real Product';
            container.innerHTML = `
                <div class="summary">
                    <span class="badge ${isReal ? 'real' : 'fake'}">${isReal ? '&#10004;' : '&#9888;'} ${escapeHtml(result.prediction)}</span>
                    <p class="confidence">${escapeHtml(result.confidence)}% Confidence</p>
                    <div class="progress"><div style="width:${Number(result.confidence) || 0}%"></div></div>
                </div>
                <h4>AI Reasoning:</h4>
                <p class="reasoning">${escapeHtml(result.reasoning)}</p>
                ${renderList('Visual Cues:', result.details.visualCues, 'cues')}
                ${renderList('Risk Factors:', result.details.riskFactors, 'risks')}
                <div class="actions" style="justify-content:flex-start">
                    <button id="download-button">Download Report</button>
                </div>`;
            document.getElementById('download-button').onclick = downloadReport;
        }

        function render() {
            document.getElementById('dropzone').classList.toggle('active', state.dragActive);
            const hasPreview = Boolean(state.preview) && Boolean(state.selectedImage);
            document.getElementById('empty-state').classList.toggle('hidden', hasPreview);
            document.getElementById('preview-state').classList.toggle('hidden', !hasPreview);
            if (hasPreview) {
                document.getElementById('preview').src = state.preview;
            }
            const analyzeButton = document.getElementById('analyze-button');
            analyzeButton.disabled = state.analyzing;
            analyzeButton.textContent = state.analyzing ? 'Analyzing...' : 'Analyze Product';
            const errorBox = document.getElementById('error');
            errorBox.classList.toggle('hidden', !state.error);
            errorBox.textContent = state.error || '';
            renderResult();
        }

        function init() {
            const dropzone = document.getElementById('dropzone');
            ['dragenter', 'dragover', 'dragleave'].forEach(type => dropzone.addEventListener(type, handleDrag));
            dropzone.addEventListener('drop', handleDrop);
            document.getElementById('file-upload').addEventListener('change', (event) => {
                if (event.target.files && event.target.files[0]) {
                    selectImage(event.target.files[0]);
                }
            });
            document.getElementById('demo-mode').addEventListener('change', (event) => {
                state.demoMode = event.target.checked;
            });
            document.getElementById('remove-button').onclick = removeImage;
            document.getElementById('analyze-button').onclick = analyzeImage;
            render();
        }
        init();
    </script>
</body>
</html>
"""

HOW_IT_WORKS: List[Dict[str, str]] = [
    {
        "title": "1. Upload Image",
        "text": "Upload a clear photo of the product you want to verify",
    },
    {
        "title": "2. AI Analysis",
        "text": "Our AI analyzes visual cues, quality markers, and authenticity indicators",
    },
    {
        "title": "3. Get Results",
        "text": "Receive detailed analysis with confidence scores and reasoning",
    },
]


def render_detector_page(endpoints: Dict[str, Any], max_image_bytes: int) -> str:
    steps = "".join(
        f"<div><h4>{step['title']}</h4><p class='muted'>{step['text']}</p></div>"
        for step in HOW_IT_WORKS
    )
    return (
        PAGE_TEMPLATE.replace("__ENDPOINTS__", json.dumps(endpoints))
        .replace("__MAX_IMAGE_MB__", str(max_image_bytes // (1024 * 1024)))
        .replace("__STEPS__", steps)
    )
