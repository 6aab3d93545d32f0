"""Initial schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2025-01-06 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """
    Create users, goals, daily stats, the course catalogue, attempts and vocabulary.
    """
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('password', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False, server_default='user'),
        sa.Column('preferred_interface_language', sa.String(), nullable=False, server_default='pl'),
        sa.Column('industry_context', sa.String(), nullable=True),
        sa.Column('avatar_url', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id', name='user_pkey'),
        sa.CheckConstraint("role IN ('user', 'teacher', 'admin')", name='user_role_check'),
    )
    op.create_index(op.f('ix_user_email'), 'user', ['email'], unique=True)

    op.create_table(
        'daily_goal',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('target_xp_per_day', sa.Integer(), nullable=False, server_default='50'),
        sa.Column('target_lessons_per_day', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], name='daily_goal_user_id_fkey'),
        sa.PrimaryKeyConstraint('id', name='daily_goal_pkey'),
        sa.CheckConstraint('target_xp_per_day > 0', name='daily_goal_target_xp_check'),
        sa.CheckConstraint('target_lessons_per_day > 0', name='daily_goal_target_lessons_check'),
    )
    op.create_index(op.f('ix_daily_goal_user_id'), 'daily_goal', ['user_id'], unique=True)

    op.create_table(
        'user_daily_stat',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('xp_earned', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('lessons_completed', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('goal_met', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], name='user_daily_stat_user_id_fkey'),
        sa.PrimaryKeyConstraint('id', name='user_daily_stat_pkey'),
        sa.UniqueConstraint('user_id', 'date', name='uq_user_daily_stat_user_date'),
        sa.CheckConstraint('xp_earned >= 0', name='user_daily_stat_xp_check'),
        sa.CheckConstraint('lessons_completed >= 0', name='user_daily_stat_lessons_check'),
    )
    op.create_index(op.f('ix_user_daily_stat_user_id'), 'user_daily_stat', ['user_id'], unique=False)
    op.create_index(op.f('ix_user_daily_stat_date'), 'user_daily_stat', ['date'], unique=False)

    op.create_table(
        'course',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=False, server_default=''),
        sa.Column('industry_tag', sa.String(), nullable=True),
        sa.Column('level', sa.String(), nullable=True),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('is_published', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('lessons_count', sa.Integer(), nullable=True),
        sa.Column('estimated_minutes', sa.Integer(), nullable=True),
        sa.Column('image_url', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['created_by'], ['user.id'], name='course_created_by_fkey'),
        sa.PrimaryKeyConstraint('id', name='course_pkey'),
    )
    op.create_index(op.f('ix_course_industry_tag'), 'course', ['industry_tag'], unique=False)
    op.create_index(op.f('ix_course_level'), 'course', ['level'], unique=False)
    op.create_index(op.f('ix_course_is_published'), 'course', ['is_published'], unique=False)

    op.create_table(
        'lesson',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('course_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('order_in_course', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('estimated_minutes', sa.Integer(), nullable=True),
        sa.Column('tasks_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['course_id'], ['course.id'], name='lesson_course_id_fkey', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='lesson_pkey'),
    )
    op.create_index(op.f('ix_lesson_course_id'), 'lesson', ['course_id'], unique=False)

    op.create_table(
        'vocabulary_item',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('english_word_or_phrase', sa.String(), nullable=False),
        sa.Column('translation', sa.String(), nullable=False),
        sa.Column('example_sentence', sa.String(), nullable=True),
        sa.Column('industry_tag', sa.String(), nullable=True),
        sa.Column('audio_url', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id', name='vocabulary_item_pkey'),
    )
    op.create_index(
        op.f('ix_vocabulary_item_english_word_or_phrase'), 'vocabulary_item', ['english_word_or_phrase'], unique=False
    )

    op.create_table(
        'task',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('lesson_id', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(), nullable=False),
        sa.Column('question_text', sa.String(), nullable=False),
        sa.Column('question_extra', sa.String(), nullable=True),
        sa.Column('correct_answer', sa.String(), nullable=False),
        sa.Column('incorrect_answers', sa.JSON(), nullable=False),
        sa.Column('vocabulary_id', sa.Integer(), nullable=True),
        sa.Column('order_in_lesson', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['lesson_id'], ['lesson.id'], name='task_lesson_id_fkey', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['vocabulary_id'], ['vocabulary_item.id'], name='task_vocabulary_id_fkey'),
        sa.PrimaryKeyConstraint('id', name='task_pkey'),
        sa.CheckConstraint(
            "type IN ('FLASHCARD', 'MULTIPLE_CHOICE', 'GAP_FILL')",
            name='task_type_check'
        ),
    )
    op.create_index(op.f('ix_task_lesson_id'), 'task', ['lesson_id'], unique=False)

    op.create_table(
        'lesson_attempt',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('lesson_id', sa.Integer(), nullable=False),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('score_percent', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_questions', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('correct_answers', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('xp_earned', sa.Integer(), nullable=False, server_default='0'),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], name='lesson_attempt_user_id_fkey'),
        sa.ForeignKeyConstraint(['lesson_id'], ['lesson.id'], name='lesson_attempt_lesson_id_fkey', ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name='lesson_attempt_pkey'),
        sa.CheckConstraint('score_percent BETWEEN 0 AND 100', name='lesson_attempt_score_check'),
    )
    op.create_index(op.f('ix_lesson_attempt_user_id'), 'lesson_attempt', ['user_id'], unique=False)
    op.create_index(op.f('ix_lesson_attempt_lesson_id'), 'lesson_attempt', ['lesson_id'], unique=False)

    op.create_table(
        'user_vocabulary',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('vocabulary_id', sa.Integer(), nullable=False),
        sa.Column('added_manually', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('strength', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_seen_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], name='user_vocabulary_user_id_fkey'),
        sa.ForeignKeyConstraint(
            ['vocabulary_id'], ['vocabulary_item.id'], name='user_vocabulary_vocabulary_id_fkey', ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id', name='user_vocabulary_pkey'),
        sa.UniqueConstraint('user_id', 'vocabulary_id', name='uq_user_vocabulary_user_vocabulary'),
        sa.CheckConstraint('strength BETWEEN 0 AND 5', name='user_vocabulary_strength_check'),
    )
    op.create_index(op.f('ix_user_vocabulary_user_id'), 'user_vocabulary', ['user_id'], unique=False)


def downgrade() -> None:
    """
    Drop all tables.
    """
    op.drop_index(op.f('ix_user_vocabulary_user_id'), table_name='user_vocabulary')
    op.drop_table('user_vocabulary')
    op.drop_index(op.f('ix_lesson_attempt_lesson_id'), table_name='lesson_attempt')
    op.drop_index(op.f('ix_lesson_attempt_user_id'), table_name='lesson_attempt')
    op.drop_table('lesson_attempt')
    op.drop_index(op.f('ix_task_lesson_id'), table_name='task')
    op.drop_table('task')
    op.drop_index(op.f('ix_vocabulary_item_english_word_or_phrase'), table_name='vocabulary_item')
    op.drop_table('vocabulary_item')
    op.drop_index(op.f('ix_lesson_course_id'), table_name='lesson')
    op.drop_table('lesson')
    op.drop_index(op.f('ix_course_is_published'), table_name='course')
    op.drop_index(op.f('ix_course_level'), table_name='course')
    op.drop_index(op.f('ix_course_industry_tag'), table_name='course')
    op.drop_table('course')
    op.drop_index(op.f('ix_user_daily_stat_date'), table_name='user_daily_stat')
    op.drop_index(op.f('ix_user_daily_stat_user_id'), table_name='user_daily_stat')
    op.drop_table('user_daily_stat')
    op.drop_index(op.f('ix_daily_goal_user_id'), table_name='daily_goal')
    op.drop_table('daily_goal')
    op.drop_index(op.f('ix_user_email'), table_name='user')
    op.drop_table('user')
