# leadportal/admin/routes.py

from datetime import datetime, timezone

from flask import render_template, redirect, url_for, request, flash, current_app, Response
from flask_login import login_required, logout_user
from leadportal.admin import bp
from leadportal.navigation import Navigator
from leadportal.services import get_account_service, get_records_store
from .controller import AdminListController, SORT_CHOICES, SORT_KEYS, DEFAULT_SORT, DEFAULT_ORDER


def build_controller():
    """Creates the list controller for this request from the query string."""
    controller = AdminListController(
        get_account_service(),
        get_records_store(),
        Navigator(),
        table=current_app.config['SUBMISSIONS_TABLE'],
        login_path=url_for('auth.login'),
    )

    # Applied before mounting so the list is fetched once, already sorted
    sort_by = request.args.get('sort', DEFAULT_SORT)
    order = request.args.get('order', DEFAULT_ORDER)
    controller.set_sort(sort_by if sort_by in SORT_KEYS else DEFAULT_SORT)
    controller.set_sort_order(order if order in ('asc', 'desc') else DEFAULT_ORDER)
    controller.search_term = request.args.get('q', '')
    return controller


def list_args(controller):
    return {
        'q': controller.search_term or None,
        'sort': controller.sort_by,
        'order': controller.sort_order,
    }


@bp.route('/')
def submissions():
    """Contact form submissions with search, sorting and a detail view."""
    controller = build_controller()
    with controller.mounted():
        if not controller.authenticated:
            return redirect(controller.navigator.target)

        view_id = request.args.get('view')
        if view_id:
            controller.select(view_id)

        return render_template(
            'admin/submissions.html',
            controller=controller,
            submissions=controller.filtered(),
            sort_choices=SORT_CHOICES,
            args=list_args(controller),
        )


@bp.route('/export.csv')
def export_csv():
    controller = build_controller()
    with controller.mounted():
        if not controller.authenticated:
            return redirect(controller.navigator.target)

        if controller.error:
            flash(f'Error: {controller.error}', 'danger')
            return redirect(url_for('admin.submissions', **list_args(controller)))

        filename = controller.export_filename(datetime.now(timezone.utc).date())
        return Response(
            controller.export_csv(),
            mimetype='text/csv',
            headers={'Content-Disposition': f'attachment; filename={filename}'},
        )


@bp.route('/submissions/<record_id>/delete', methods=['POST'])
def delete_submission(record_id):
    controller = build_controller()
    with controller.mounted():
        if not controller.authenticated:
            return redirect(controller.navigator.target)

        if controller.delete(record_id):
            flash('Submission deleted.', 'success')
        else:
            flash('Failed to delete submission', 'danger')

        return redirect(url_for('admin.submissions', **list_args(controller)))


@bp.route('/logout', methods=['POST'])
@login_required
def logout():
    controller = build_controller()
    error = controller.sign_out()
    if error:
        flash(error, 'danger')
        return redirect(url_for('admin.submissions'))

    logout_user()
    return redirect(controller.navigator.target)
