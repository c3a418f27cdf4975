#!/usr/bin/env python3
"""
Seed data script for testing the expense tracker API.
Creates sample expenses and budget preferences for one user.
"""

import os
import sys
from datetime import timedelta
from decimal import Decimal
import uuid
import random

# Add src directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from shared import config
from shared.dynamodb import get_dynamodb_resource
from shared.dates import to_storage_date, to_timestamp, utc_now
from shared.validators import VALID_CATEGORIES, VALID_PAYMENT_METHODS


TITLES = {
    'Food & Dining': ['Lunch at cafe', 'Pizza dinner', 'Breakfast meal', 'Restaurant with friends'],
    'Transportation': ['Uber ride to office', 'Metro card recharge', 'Petrol refill', 'Auto to station'],
    'Shopping': ['New shoes', 'Clothes shopping', 'Electronics accessories'],
    'Entertainment': ['Movie tickets', 'Netflix subscription', 'Spotify premium'],
    'Bills & Utilities': ['Electricity bill', 'Internet bill', 'Mobile recharge'],
    'Healthcare': ['Pharmacy medicines', 'Doctor consultation'],
    'Travel': ['Hotel booking', 'Flight to Goa'],
    'Education': ['Online course', 'Books'],
    'Groceries': ['Supermarket run', 'Vegetables and fruits', 'Milk and bread'],
    'Personal Care': ['Haircut', 'Salon visit'],
    'Home & Garden': ['Furniture', 'Garden supplies'],
    'Insurance': ['Health insurance premium'],
    'Investments': ['Mutual fund SIP'],
    'Gifts & Donations': ['Birthday gift', 'Charity donation'],
    'Business': ['Coworking day pass', 'Client meeting'],
    'Other': ['Miscellaneous']
}


def seed_expenses(dynamodb, table_name, user_id, num_expenses=50):
    """Seed sample expenses spread over the last 180 days."""
    table = dynamodb.Table(table_name)

    print(f"Creating {num_expenses} sample expenses...")

    now = utc_now()
    expenses = []
    for i in range(num_expenses):
        date = now - timedelta(days=random.randint(0, 180), hours=random.randint(0, 12))
        category = random.choice(VALID_CATEGORIES)
        amount = round(random.uniform(50.0, 5000.0), 2)

        expense = {
            'user_id': user_id,
            'expense_id': str(uuid.uuid4()),
            'title': random.choice(TITLES[category]),
            'amount': Decimal(str(amount)),
            'category': category,
            'date': to_storage_date(date),
            'payment_method': random.choice(VALID_PAYMENT_METHODS),
            'is_recurring': category in ('Bills & Utilities', 'Insurance'),
            'tags': [],
            'created_at': to_timestamp(date),
            'updated_at': to_timestamp(date)
        }

        expenses.append(expense)

    # Batch write expenses
    with table.batch_writer() as batch:
        for expense in expenses:
            batch.put_item(Item=expense)

    print(f"Created {len(expenses)} expenses")
    return expenses


def seed_preferences(dynamodb, table_name, user_id):
    """Seed sample budget preferences."""
    table = dynamodb.Table(table_name)

    preferences = {
        'user_id': user_id,
        'daily_limit': Decimal('2000'),
        'monthly_limit': Decimal('40000'),
        'notifications_enabled': True,
        'warning_threshold': 80,
        'monthly_income': Decimal('100000'),
        'savings_goal': Decimal('20000'),
        'updated_at': to_timestamp(utc_now())
    }

    table.put_item(Item=preferences)

    print("Created budget preferences")
    return preferences


def main():
    """Main function."""
    print("=" * 50)
    print("Smart Expense Tracker - Seed Data Script")
    print("=" * 50)

    expenses_table = input(f"Expenses table (default: {config.EXPENSES_TABLE}): ").strip()
    expenses_table = expenses_table or config.EXPENSES_TABLE

    preferences_table = input(f"Preferences table (default: {config.PREFERENCES_TABLE}): ").strip()
    preferences_table = preferences_table or config.PREFERENCES_TABLE

    # Get user ID
    user_id = input("\nEnter user ID (Cognito sub) to seed data for: ").strip()
    if not user_id:
        print("Error: User ID is required")
        sys.exit(1)

    # Get number of expenses
    num_expenses = input("Enter number of expenses to create (default: 50): ").strip()
    num_expenses = int(num_expenses) if num_expenses else 50

    # Connect to DynamoDB
    print("\nConnecting to DynamoDB...")
    dynamodb = get_dynamodb_resource()

    print("\nSeeding expenses...")
    expenses = seed_expenses(dynamodb, expenses_table, user_id, num_expenses)

    print("\nSeeding preferences...")
    seed_preferences(dynamodb, preferences_table, user_id)

    print("\n" + "=" * 50)
    print("Data seeding complete!")
    print("=" * 50)
    print(f"\nCreated {len(expenses)} expenses and budget preferences for user: {user_id}")


if __name__ == '__main__':
    main()
