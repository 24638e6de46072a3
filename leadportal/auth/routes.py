# leadportal/auth/routes.py

from flask import render_template, redirect, url_for, request, flash, current_app, jsonify, make_response, abort
from flask_login import current_user, login_user
from leadportal.auth import bp
from leadportal.models.user import PortalUser
from leadportal.navigation import Navigator
from leadportal.services import get_account_service, get_records_store
from .controllers import LoginController, SignupController, new_login_state, new_signup_state
from .forms import LoginForm, SignupForm, form_values

FORM_STATES = {
    'login': new_login_state,
    'signup': new_signup_state,
}


@bp.route('/login', methods=['GET', 'POST'])
def login():
    if current_user.is_authenticated:
        return redirect(url_for('main.index'))

    form = LoginForm()
    controller = LoginController(
        get_account_service(),
        Navigator(),
        landing_path=current_app.config['LANDING_PATH'],
    )

    if form.is_submitted():
        controller.state.load(form_values(form, controller.state.fields))
        controller.submit()

        if controller.identity is not None:
            login_user(PortalUser(controller.identity), remember=False)

        if controller.navigator.target:
            return redirect(controller.navigator.target)

        if controller.state.submit_error:
            flash(controller.state.submit_error, 'danger')

    return render_template('auth/login.html', form=form, state=controller.state)


@bp.route('/signup', methods=['GET', 'POST'])
def signup():
    if current_user.is_authenticated:
        return redirect(url_for('main.index'))

    form = SignupForm()
    navigator = Navigator()
    controller = SignupController(
        get_account_service(),
        get_records_store(),
        navigator,
        redirect_target=url_for('auth.login', _external=True),
        login_path=url_for('auth.login'),
        redirect_delay=current_app.config['SIGNUP_REDIRECT_DELAY'],
        profile_table=current_app.config['PROFILE_TABLE'],
    )

    try:
        if form.is_submitted():
            controller.state.load(form_values(form, controller.state.fields))
            controller.submit()

            if controller.state.submit_error:
                flash(controller.state.submit_error, 'danger')
            elif controller.pending_navigation is not None:
                flash('Account created successfully! Redirecting to login...', 'success')
                # Re-render with the reset values rather than the submitted ones
                form = SignupForm(formdata=None, data=controller.state.values)

        response = make_response(render_template('auth/signup.html', form=form, state=controller.state))
        refresh = navigator.refresh_header()
        if refresh:
            response.headers['Refresh'] = refresh
        return response
    finally:
        controller.teardown()


@bp.route('/auth/validate/<form_name>', methods=['POST'])
def validate_field(form_name):
    """
    Live validation for one field event.

    Expects JSON ``{"event": "change"|"blur", "field": ..., "value": ...,
    "values": {...}, "touched": [...]}`` and answers with the form snapshot
    (visible errors only).
    """
    if form_name not in FORM_STATES:
        abort(404)

    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({'error': 'Invalid request format.'}), 400

    state = FORM_STATES[form_name]()
    field = payload.get('field')
    event = payload.get('event')
    if field not in state.fields or event not in ('change', 'blur'):
        return jsonify({'error': 'Unknown field or event.'}), 400

    values = payload.get('values') or {}
    touched = payload.get('touched') or []
    if not isinstance(values, dict) or not isinstance(touched, list):
        return jsonify({'error': 'Invalid request format.'}), 400

    state.load(values, touched)
    value = state.coerce(field, payload.get('value', state.values.get(field)))
    if event == 'change':
        state.on_change(field, value)
    else:
        state.on_blur(field, value)

    return jsonify(state.snapshot())
