import logging

from flask import Flask, jsonify, request

from musebot.config import load_settings
from musebot.errors import ConfigurationError, TransportError
from musebot.inference import GenerationParameters, HuggingFaceClient, extract_generated_text

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_app(settings=None, client=None):
    settings = settings or load_settings()
    client = client or HuggingFaceClient.from_settings(settings)
    parameters = GenerationParameters()

    app = Flask(__name__)

    @app.route('/chat', methods=['POST'])
    def chat():
        body = request.get_json(silent=True)
        user_message = body.get('message') if isinstance(body, dict) else None
        if not isinstance(user_message, str) or not user_message.strip():
            return jsonify({'error': 'Message must not be empty'}), 400

        messages = [{'role': 'user', 'content': user_message.strip()}]
        try:
            payload = client.complete(settings.model_id, messages, parameters)
        except ConfigurationError as e:
            logger.error(f"Backend not configured: {e}")
            return jsonify({'error': str(e)}), 500
        except TransportError as e:
            logger.error(f"Inference request failed: {e}")
            return jsonify({'error': str(e)}), 502
        except Exception as e:
            logger.error(f"Unexpected error during completion: {e}", exc_info=True)
            return jsonify({'error': str(e)}), 500

        return jsonify({'generated_text': extract_generated_text(payload)})

    @app.route('/health', methods=['GET'])
    def health():
        return jsonify({
            'status': 'healthy',
            'model': settings.model_id,
            'token_configured': settings.token_configured,
        })

    return app


if __name__ == '__main__':
    settings = load_settings()
    # Streamlit calls the backend over 127.0.0.1 unless MUSE_BACKEND_HOST says otherwise
    create_app(settings).run(host=settings.backend_host, port=settings.backend_port, debug=False)
